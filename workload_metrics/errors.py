"""
Error types for the workload metrics report.
"""


class WorkloadMetricsError(Exception):
    """Base class for every fatal or recoverable report error."""


class ConfigError(WorkloadMetricsError):
    """Config file could not be read, parsed or validated."""


class TimeParseError(WorkloadMetricsError):
    """A window boundary is not a valid RFC3339 timestamp."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} time: {value!r}")


class ClusterError(WorkloadMetricsError):
    """Kubernetes connection or list call failed."""


class MetricsError(WorkloadMetricsError):
    """Base class for monitoring API failures."""


class MetricsAPIError(MetricsError):
    """The monitoring service answered with an error for one workload."""

    def __init__(self, message: str, code: str | None = None, request_id: str | None = None):
        self.code = code
        self.request_id = request_id
        super().__init__(message)


class MetricsClientError(MetricsError):
    """Client side or transport failure while talking to the monitoring API."""


class ReportFileError(WorkloadMetricsError):
    """Output CSV could not be created or written."""
