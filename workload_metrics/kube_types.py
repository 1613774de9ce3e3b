"""
Type definitions for deployments, time windows and report rows.
"""
from dataclasses import dataclass
from datetime import datetime

COMPACT_TIME_FORMAT = "%Y%m%dT%H%M%S"


@dataclass(frozen=True)
class DeploymentRef:
    """Kubernetes Deployment reference."""
    name: str
    namespace: str


@dataclass(frozen=True)
class TimeWindow:
    """Query window; both ends are timezone aware."""
    start: datetime
    end: datetime

    @property
    def start_rfc3339(self) -> str:
        return self.start.isoformat(timespec="seconds")

    @property
    def end_rfc3339(self) -> str:
        return self.end.isoformat(timespec="seconds")

    @property
    def start_compact(self) -> str:
        return self.start.strftime(COMPACT_TIME_FORMAT)

    @property
    def end_compact(self) -> str:
        return self.end.strftime(COMPACT_TIME_FORMAT)


@dataclass(frozen=True)
class WorkloadUsage:
    """Peak usage-vs-request ratios of one workload."""
    cpu_max_percent: float = 0.0
    mem_max_percent: float = 0.0


@dataclass(frozen=True)
class ReportRow:
    """One CSV line."""
    namespace: str
    deployment: str
    cpu_max_percent: float
    mem_max_percent: float

    def as_csv(self) -> list[str]:
        return [
            self.namespace,
            self.deployment,
            f"{self.cpu_max_percent:f}",
            f"{self.mem_max_percent:f}",
        ]
