"""Tests for request tracing and the per-kind metrics."""
import pytest

from core.errors import DecodeError, GenerationError, MissingCredentialError
from core.observability import (
    DECODE_FAILURE, GENERATION_FAILURE, UNEXPECTED_FAILURE,
    Tracer, classify_failure, get_metrics_summary, metrics,
)


@pytest.fixture(autouse=True)
def fresh_metrics():
    metrics.reset()
    yield
    metrics.reset()


class TestClassifyFailure:

    @pytest.mark.parametrize("error, expected", [
        (DecodeError("bad json"), DECODE_FAILURE),
        (GenerationError("400"), GENERATION_FAILURE),
        (MissingCredentialError("no key"), GENERATION_FAILURE),
        (RuntimeError("bug"), UNEXPECTED_FAILURE),
    ])
    def test_classes(self, error, expected):
        """Decode problems are told apart from backend problems and bugs."""
        assert classify_failure(error) == expected


class TestTracer:

    def test_success_recorded(self):
        """A clean exit counts as a success with a measured latency."""
        with Tracer("dashboard", "New Delhi") as trace:
            pass
        assert trace.success
        assert trace.duration_ms >= 0
        assert get_metrics_summary()["dashboard"]["successes"] == 1

    def test_exception_not_suppressed(self):
        """Failures are recorded and re-raised."""
        with pytest.raises(DecodeError):
            with Tracer("dashboard") as trace:
                raise DecodeError("bad")
        assert trace.failure == DECODE_FAILURE
        summary = get_metrics_summary()["dashboard"]
        assert summary["requests"] == 1
        assert summary["decode_failures"] == 1
        assert summary["successes"] == 0

    def test_kinds_kept_apart(self):
        """Dashboard and simulation requests are summarised separately."""
        with Tracer("dashboard"):
            pass
        with pytest.raises(GenerationError):
            with Tracer("simulation", "what if"):
                raise GenerationError("down")
        summary = get_metrics_summary()
        assert summary["dashboard"]["generation_failures"] == 0
        assert summary["simulation"]["generation_failures"] == 1
