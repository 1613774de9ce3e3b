"""
Kubernetes client for listing deployments.
"""
import logging
from typing import List, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from workload_metrics.config import settings
from workload_metrics.errors import ClusterError
from workload_metrics.kube_types import DeploymentRef

logger = logging.getLogger(__name__)


class KubeClient:
    """Kubernetes client scoped to a single namespace."""

    def __init__(
        self,
        namespace: str,
        kubeconfig: Optional[str] = None,
        context: Optional[str] = None,
        in_cluster: bool = False,
        apps_v1: Optional[client.AppsV1Api] = None,
    ):
        """
        Initialize Kubernetes client.

        Args:
            namespace: Target Kubernetes namespace
            kubeconfig: Path to the kubeconfig file (optional)
            context: Kubernetes context name (optional)
            in_cluster: Whether running inside cluster (default: False)
            apps_v1: Preconfigured AppsV1Api, skips config loading
        """
        self.namespace = namespace
        self.page_size = settings.K8S_PAGE_SIZE

        if apps_v1 is not None:
            self.apps_v1 = apps_v1
            return

        try:
            if in_cluster:
                config.load_incluster_config()
            else:
                config.load_kube_config(config_file=kubeconfig, context=context)

            self.apps_v1 = client.AppsV1Api()
            logger.info(f"✅ Kubernetes client initialized for namespace: {namespace}")

        except (ConfigException, OSError) as e:
            logger.error(f"❌ Failed to initialize Kubernetes client: {e}")
            raise ClusterError(f"Failed to initialize Kubernetes client: {e}") from e

    def list_deployments(self) -> List[DeploymentRef]:
        """
        Get all deployments in the namespace, following continue tokens.

        Returns:
            List of DeploymentRef objects in API order
        """
        deployments = []
        continue_token = None

        while True:
            kwargs = {"namespace": self.namespace, "limit": self.page_size}
            if continue_token:
                kwargs["_continue"] = continue_token

            try:
                page = self.apps_v1.list_namespaced_deployment(**kwargs)
            except ApiException as e:
                logger.error(f"Failed to list deployments: {e}")
                raise ClusterError(f"Failed to list deployments in {self.namespace}: {e.status} {e.reason}") from e
            except HTTPError as e:
                logger.error(f"Failed to reach the cluster: {e}")
                raise ClusterError(f"Failed to reach the cluster: {e}") from e

            for item in page.items:
                deployments.append(DeploymentRef(name=item.metadata.name, namespace=self.namespace))

            continue_token = page.metadata._continue if page.metadata else None
            if not continue_token:
                break

        logger.info(f"Retrieved {len(deployments)} deployments from namespace {self.namespace}")
        return deployments
