from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from workload_metrics.config import Configuration
from workload_metrics.kube_types import TimeWindow

CST = timezone(timedelta(hours=8))


def make_metric(name, values):
    """MetricData-like object with a single series."""
    points = [SimpleNamespace(Timestamp=1721232000 + i * 3600, Value=v) for i, v in enumerate(values)]
    return SimpleNamespace(MetricName=name, Points=[SimpleNamespace(Dimensions=[], Values=points)])


def make_response(*metrics):
    return SimpleNamespace(Data=list(metrics), RequestId="req-1", to_json_string=lambda: '{"Data": []}')


def make_deployment_page(names, continue_token=None):
    return SimpleNamespace(
        items=[SimpleNamespace(metadata=SimpleNamespace(name=n)) for n in names],
        metadata=SimpleNamespace(_continue=continue_token),
    )


class FakeMonitorSDK:
    """Stands in for the SDK MonitorClient, keyed by workload name."""

    def __init__(self, responses):
        self.responses = responses
        self.requests = []

    def DescribeStatisticData(self, request):
        self.requests.append(request)
        workload = request.Conditions[3].Value[0]
        outcome = self.responses[workload]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def configuration():
    return Configuration(
        region="ap-guangzhou",
        clusterID="cls-abc123",
        namespace="ns",
        secretID="AKIDtest",
        secretKey="secret",
    )


@pytest.fixture
def window():
    return TimeWindow(
        start=datetime(2024, 7, 18, 0, 0, 0, tzinfo=CST),
        end=datetime(2024, 7, 18, 13, 0, 0, tzinfo=CST),
    )


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "region: ap-guangzhou\n"
        "clusterID: cls-abc123\n"
        "namespace: ns\n"
        "secretID: AKIDtest\n"
        "secretKey: secret\n"
    )
    return path
