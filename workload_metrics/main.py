"""
Command line entry point: list deployments, query peak usage, write the CSV.
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from workload_metrics.config import Configuration, load_config, settings
from workload_metrics.errors import MetricsAPIError, WorkloadMetricsError
from workload_metrics.kube_client import KubeClient
from workload_metrics.kube_types import DeploymentRef, ReportRow, TimeWindow, WorkloadUsage
from workload_metrics.monitor_client import MonitorClient
from workload_metrics.report import ReportWriter, report_path
from workload_metrics.time_window import parse_time_window

logger = logging.getLogger(__name__)

HOME = os.getenv("HOME", "")
DEFAULT_KUBECONFIG = os.path.join(HOME, ".kube", "config")
DEFAULT_CONFIG = os.path.join(HOME, ".metrics", "config.yaml")
DEFAULT_START = "2024-07-18T00:00:00+08:00"
DEFAULT_END = "2024-07-18T13:00:00+08:00"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=settings.APP_NAME,
        description="Write peak CPU/memory usage of every deployment in a namespace to CSV.",
    )
    parser.add_argument("-kubeconfig", "--kubeconfig", default=DEFAULT_KUBECONFIG,
                        help="path to the kubeconfig file")
    parser.add_argument("-config", "--config", default=DEFAULT_CONFIG,
                        help="path to the config file")
    parser.add_argument("-start", "--start", default=DEFAULT_START,
                        help="start time for monitoring in RFC3339 format")
    parser.add_argument("-end", "--end", default=DEFAULT_END,
                        help="end time for monitoring in RFC3339 format")
    parser.add_argument("-debug", "--debug", action="store_true",
                        help="show raw metrics, enabled debug logging.")
    parser.add_argument("-context", "--context", default=settings.K8S_CONTEXT,
                        help="kubeconfig context to use")
    parser.add_argument("-output-dir", "--output-dir", dest="output_dir", default=".",
                        help="directory the CSV file is written to")
    return parser


def setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if debug:
        # raw monitor responses are logged explicitly, keep the HTTP stack quiet
        logging.getLogger("urllib3").setLevel(logging.INFO)


def collect_usage(
    monitor: MonitorClient,
    configuration: Configuration,
    deployment: DeploymentRef,
    window: TimeWindow,
) -> WorkloadUsage:
    """Peak usage of one deployment; service-side errors degrade to zeros."""
    try:
        return monitor.get_deployment_metrics(configuration, deployment.name, window)
    except MetricsAPIError as e:
        logger.warning(f"An API error has returned: {e}")
        return WorkloadUsage()


def write_report(
    writer: ReportWriter,
    monitor: MonitorClient,
    configuration: Configuration,
    deployments: List[DeploymentRef],
    window: TimeWindow,
) -> None:
    for deployment in deployments:
        usage = collect_usage(monitor, configuration, deployment, window)
        writer.write_row(ReportRow(
            namespace=configuration.namespace,
            deployment=deployment.name,
            cpu_max_percent=usage.cpu_max_percent,
            mem_max_percent=usage.mem_max_percent,
        ))


def run(args: argparse.Namespace) -> str:
    """
    Run the whole report.

    Returns:
        Path of the written CSV file
    """
    configuration = load_config(args.config)
    window = parse_time_window(args.start, args.end)

    kube = KubeClient(
        namespace=configuration.namespace,
        kubeconfig=args.kubeconfig,
        context=args.context,
        in_cluster=settings.K8S_IN_CLUSTER,
    )
    deployments = kube.list_deployments()

    monitor = MonitorClient.from_config(configuration, debug=args.debug)

    path = report_path(args.output_dir, configuration.namespace, window)
    with ReportWriter(path) as writer:
        write_report(writer, monitor, configuration, deployments, window)
    return path


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    try:
        run(args)
    except WorkloadMetricsError as e:
        logger.error(f"❌ {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
