"""
Prometheus metrics for the requirements service.

Custom metrics for template copying, provisioning and lifecycle monitoring.
"""

from prometheus_client import Counter

# Copy metrics
steps_copied_total = Counter(
    "steps_copied_total",
    "Total step rows materialized by copy operations",
    ["target", "partition"],
)

documents_copied_total = Counter(
    "documents_copied_total",
    "Total requirement documents copied between requirements",
)

# Provisioning metrics
applications_provisioned_total = Counter(
    "applications_provisioned_total",
    "Provisioning attempts by outcome",
    ["outcome"],
)

# Lifecycle metrics
application_transitions_total = Counter(
    "application_transitions_total",
    "Total application status transitions",
    ["from_status", "to_status"],
)

# Error metrics
operation_errors_total = Counter(
    "operation_errors_total",
    "Total failed public operations",
    ["operation", "code"],
)
