"""AQI Tracker Core.

Modules:
    controller: View state machine and fetch orchestration.
    decoder: Model output → typed DashboardData.
    errors: Exception taxonomy.
    observability: Logging, tracing and generation metrics.
"""
