"""Observability Module - Logging, Tracing, and Metrics

This module provides:
1. Structured logging configuration
2. Per-request tracing of generation calls, keyed by request kind
3. Counters that separate transport failures from decode failures
"""
import logging
import time
from typing import Dict, Any, Optional
from dataclasses import dataclass, field

from config.settings import LOG_LEVEL
from core.errors import AQITrackerError, DecodeError

# Configure structured logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger("aqi_tracker")

# Failure classes recorded per request kind
GENERATION_FAILURE = "generation"
DECODE_FAILURE = "decode"
UNEXPECTED_FAILURE = "unexpected"


def classify_failure(error: BaseException) -> str:
    if isinstance(error, DecodeError):
        return DECODE_FAILURE
    if isinstance(error, AQITrackerError):
        return GENERATION_FAILURE
    return UNEXPECTED_FAILURE


@dataclass
class GenerationTrace:
    """One generation request: its kind ("dashboard" / "simulation"), timing and outcome."""
    kind: str
    detail: str = ""
    started: float = field(default_factory=time.perf_counter)
    duration_ms: float = 0.0
    failure: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.failure is None

    def complete(self, error: Optional[BaseException] = None):
        self.duration_ms = (time.perf_counter() - self.started) * 1000
        if error is not None:
            self.failure = classify_failure(error)


@dataclass
class KindStats:
    requests: int = 0
    successes: int = 0
    failures: Dict[str, int] = field(default_factory=dict)
    total_latency_ms: float = 0.0

    @property
    def avg_latency_ms(self) -> float:
        if self.requests == 0:
            return 0.0
        return self.total_latency_ms / self.requests


@dataclass
class GenerationMetrics:
    """Aggregated outcomes of generation requests, per request kind."""
    kinds: Dict[str, KindStats] = field(default_factory=dict)

    def record(self, trace: GenerationTrace):
        """Record a completed trace."""
        stats = self.kinds.setdefault(trace.kind, KindStats())
        stats.requests += 1
        stats.total_latency_ms += trace.duration_ms
        if trace.success:
            stats.successes += 1
        else:
            stats.failures[trace.failure] = stats.failures.get(trace.failure, 0) + 1

    def summary(self) -> Dict[str, Dict[str, Any]]:
        """Return per-kind counters, e.g. for the UI footer."""
        return {
            kind: {
                "requests": stats.requests,
                "successes": stats.successes,
                "generation_failures": stats.failures.get(GENERATION_FAILURE, 0),
                "decode_failures": stats.failures.get(DECODE_FAILURE, 0),
                "unexpected_failures": stats.failures.get(UNEXPECTED_FAILURE, 0),
                "avg_latency_ms": round(stats.avg_latency_ms),
            }
            for kind, stats in self.kinds.items()
        }

    def reset(self):
        self.kinds.clear()


# Global metrics instance
metrics = GenerationMetrics()


class Tracer:
    """Context manager for tracing one generation request."""

    def __init__(self, kind: str, detail: Any = None):
        self.trace = GenerationTrace(kind=kind, detail=str(detail)[:80] if detail else "")

    def __enter__(self):
        logger.info(f"▶ {self.trace.kind} request started ({self.trace.detail})")
        return self.trace

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.trace.complete(exc_val)
        if self.trace.success:
            logger.info(f"✔ {self.trace.kind} request completed in {self.trace.duration_ms:.0f}ms")
        else:
            logger.error(f"✖ {self.trace.kind} request failed ({self.trace.failure}): {exc_val}")

        metrics.record(self.trace)
        return False  # Don't suppress exceptions


def get_metrics_summary() -> Dict[str, Dict[str, Any]]:
    """Get current metrics summary for the UI footer / logs."""
    return metrics.summary()
