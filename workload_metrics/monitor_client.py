"""
Tencent Cloud monitor client for workload peak usage.
"""
import logging
from typing import Any, Iterable, Optional

from tencentcloud.common import credential
from tencentcloud.common.exception.tencent_cloud_sdk_exception import TencentCloudSDKException
from tencentcloud.common.profile.client_profile import ClientProfile
from tencentcloud.common.profile.http_profile import HttpProfile
from tencentcloud.monitor.v20180724 import models
from tencentcloud.monitor.v20180724 import monitor_client as tc_monitor_client

from workload_metrics.config import Configuration, settings
from workload_metrics.errors import MetricsAPIError, MetricsClientError
from workload_metrics.kube_types import TimeWindow, WorkloadUsage

logger = logging.getLogger(__name__)

CPU_METRIC = "K8sWorkloadRateCpuCoreUsedRequestMax"
MEM_METRIC = "K8sWorkloadRateMemWorkingSetBytesRequestMax"
METRIC_NAMES = [CPU_METRIC, MEM_METRIC]

WORKLOAD_KIND = "Deployment"

# SDK codes raised before or instead of a service answer
TRANSPORT_ERROR_CODES = ("ServerNetworkError",)


def is_api_error(e: TencentCloudSDKException) -> bool:
    """True when the service itself rejected the call."""
    code = e.get_code() or ""
    if code.startswith("Client") or code in TRANSPORT_ERROR_CODES:
        return False
    return bool(code)


def peak_value(values: Iterable[Any]) -> float:
    """Largest non-null point value, 0 when there is none."""
    max_value = 0.0
    for point in values:
        if point.Value is not None and point.Value > max_value:
            max_value = float(point.Value)
    return max_value


def reduce_metric_data(data: Optional[Iterable[Any]]) -> WorkloadUsage:
    """
    Reduce a DescribeStatisticData payload to per-metric maxima.

    Only the first series of each metric is read. Metrics are matched by
    name, so response order does not matter and unknown names are dropped.
    """
    result = {name: 0.0 for name in METRIC_NAMES}

    for metric in data or []:
        if not metric.MetricName or not metric.Points or not metric.Points[0].Values:
            continue
        if metric.MetricName not in result:
            continue
        result[metric.MetricName] = peak_value(metric.Points[0].Values)

    return WorkloadUsage(cpu_max_percent=result[CPU_METRIC], mem_max_percent=result[MEM_METRIC])


def build_request(configuration: Configuration, deployment_name: str, window: TimeWindow) -> models.DescribeStatisticDataRequest:
    """Statistic data request scoped to one workload."""
    request = models.DescribeStatisticDataRequest()
    request.Module = "monitor"
    request.Namespace = settings.MONITOR_NAMESPACE
    request.MetricNames = list(METRIC_NAMES)
    request.Conditions = [
        _condition("tke_cluster_instance_id", configuration.cluster_id),
        _condition("namespace", configuration.namespace),
        _condition("workload_kind", WORKLOAD_KIND),
        _condition("workload_name", deployment_name),
    ]
    request.Period = settings.METRICS_PERIOD_SECS
    request.StartTime = window.start_rfc3339
    request.EndTime = window.end_rfc3339
    return request


def _condition(key: str, value: str) -> models.MidQueryCondition:
    condition = models.MidQueryCondition()
    condition.Key = key
    condition.Operator = "="
    condition.Value = [value]
    return condition


class MonitorClient:
    """Monitor API client for TKE workload metrics."""

    def __init__(
        self,
        region: str,
        secret_id: str,
        secret_key: str,
        endpoint: Optional[str] = None,
        debug: bool = False,
        client: Optional[Any] = None,
    ):
        """
        Initialize monitor client.

        Args:
            region: Cloud region, e.g. ap-guangzhou
            secret_id: API secret id
            secret_key: API secret key
            endpoint: Monitor API endpoint (default from settings)
            debug: Log raw responses
            client: Preconfigured SDK client, skips credential setup
        """
        self.debug = debug

        if client is not None:
            self.client = client
            return

        try:
            cred = credential.Credential(secret_id, secret_key)
            http_profile = HttpProfile(
                endpoint=endpoint or settings.MONITOR_ENDPOINT,
                reqTimeout=settings.REQUEST_TIMEOUT_SECS,
            )
            self.client = tc_monitor_client.MonitorClient(cred, region, ClientProfile(httpProfile=http_profile))
        except TencentCloudSDKException as e:
            logger.error(f"❌ Failed to initialize monitor client: {e}")
            raise MetricsClientError(f"Failed to initialize monitor client: {e}") from e

    @classmethod
    def from_config(cls, configuration: Configuration, debug: bool = False) -> "MonitorClient":
        return cls(
            region=configuration.region,
            secret_id=configuration.secret_id,
            secret_key=configuration.secret_key,
            debug=debug,
        )

    def get_deployment_metrics(self, configuration: Configuration, deployment_name: str, window: TimeWindow) -> WorkloadUsage:
        """
        Get peak CPU and memory usage-vs-request of a deployment.

        Args:
            configuration: Cluster id and namespace to scope the query
            deployment_name: Workload name
            window: Query window

        Returns:
            WorkloadUsage, 0.0 for metrics missing from the response

        Raises:
            MetricsAPIError: the service returned an error for this workload
            MetricsClientError: the call did not reach the service
        """
        logger.info(f"start collect {configuration.namespace}/{deployment_name} metrics.")
        request = build_request(configuration, deployment_name, window)

        try:
            response = self.client.DescribeStatisticData(request)
        except TencentCloudSDKException as e:
            if is_api_error(e):
                raise MetricsAPIError(str(e), code=e.get_code(), request_id=e.get_request_id()) from e
            raise MetricsClientError(f"Monitor request for {configuration.namespace}/{deployment_name} failed: {e}") from e

        if self.debug:
            logger.info(f"collect {configuration.namespace}/{deployment_name} raw metrics {response.to_json_string()}.")

        return reduce_metric_data(response.Data)
