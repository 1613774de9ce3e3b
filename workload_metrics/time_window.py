"""
RFC3339 window parsing.
"""
import re
from datetime import datetime

from workload_metrics.errors import TimeParseError
from workload_metrics.kube_types import TimeWindow

# zero padded fields, upper case T/Z, offset with a colon
RFC3339_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,6})?(Z|[+-]\d{2}:\d{2})")

RFC3339_FORMATS = [
    "%Y-%m-%dT%H:%M:%S%z",     # 2024-07-18T00:00:00+08:00
    "%Y-%m-%dT%H:%M:%S.%f%z",  # 2024-07-18T00:00:00.5+08:00
]


def parse_time(value: str, field: str) -> datetime:
    """Parse an offset-aware RFC3339 timestamp; `field` names it in errors."""
    if not RFC3339_PATTERN.fullmatch(value):
        raise TimeParseError(field, value)

    for fmt in RFC3339_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    raise TimeParseError(field, value)


def parse_time_window(start: str, end: str) -> TimeWindow:
    # end before start is accepted as is
    return TimeWindow(start=parse_time(start, "start"), end=parse_time(end, "end"))
