# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics: single source of truth for all metric objects.
Imported by services, repositories and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "treating_requests_total",
    "Total HTTP requests to the treating calendar",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "treating_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "treating_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
SCHEDULES_GENERATED = Counter(
    "treating_schedules_generated_total",
    "Total schedule generations",
    ["sort_type"],
)
ASSIGNMENTS_GENERATED = Counter(
    "treating_assignments_generated_total",
    "Total assignments written by schedule generation",
)
SWAPS_TOTAL = Counter(
    "treating_swaps_total",
    "Total successful swaps between two dates",
)
SWAPS_REJECTED = Counter(
    "treating_swaps_rejected_total",
    "Swaps rejected by validation",
    ["reason"],
)
PEOPLE_ADDED = Counter(
    "treating_people_added_total",
    "Total people added to a roster",
)
PEOPLE_REMOVED = Counter(
    "treating_people_removed_total",
    "Total people removed from a roster",
)
ROSTER_SIZE = Gauge(
    "treating_roster_size",
    "Number of people across all rosters",
)
REMINDERS_SENT = Counter(
    "treating_reminders_sent_total",
    "Total reminder notifications delivered",
    ["kind"],
)
PERSISTENCE_ERRORS = Counter(
    "treating_persistence_errors_total",
    "Database operations that failed",
    ["operation"],
)
