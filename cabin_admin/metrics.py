"""
Prometheus metrics for back-office actions, availability checks, database
writes and the session cache.

Metrics are exposed via the /metrics endpoint for scraping by Prometheus.

Example:
    >>> from cabin_admin.metrics import action_outcomes
    >>> action_outcomes.labels(action="create_reservation", outcome="ok").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

from cabin_admin.cache import session_cache

# =============================================================================
# Action Metrics
# =============================================================================

action_outcomes = Counter(
    "cabin_admin_actions_total",
    "Total back-office write actions by outcome",
    ["action", "outcome"],
)
"""
Counter for write actions.

Labels:
    action: Service action name (create_reservation, delete_payment, ...)
    outcome: ok, validation, conflict, authorization, not_found or backend
"""

action_duration = Histogram(
    "cabin_admin_action_duration_seconds",
    "Duration of back-office write actions in seconds",
    ["action"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, float("inf")),
)

# =============================================================================
# Availability Metrics
# =============================================================================

availability_conflicts = Counter(
    "cabin_admin_availability_conflicts_total",
    "Total date-range conflicts detected",
    ["source"],
)
"""
Counter for detected conflicts.

Labels:
    source: preview (in-memory snapshot) or authoritative (pre-write query)
"""

# =============================================================================
# Database Metrics
# =============================================================================

db_operations = Counter(
    "cabin_admin_db_operations_total",
    "Total database write operations performed",
    ["operation", "table"],
)
"""
Counter for database writes.

Labels:
    operation: insert, update or delete
    table: reservas, pagos or mensajes
"""

# =============================================================================
# Session Cache Metrics
# =============================================================================

session_cache_entries = Gauge(
    "cabin_admin_session_cache_entries",
    "Resolved staff sessions currently held in the in-memory cache",
)
session_cache_entries.set_function(session_cache.size)
