#kube_deployer\container.py

"""Dependency injection container - wires settings, cluster client and deployer."""

from typing import Optional

from kube_deployer.config import DeployerSettings
from kube_deployer.core.cluster import ClusterClient
from kube_deployer.deployer import KubernetesAppDeployer
from kube_deployer.infrastructure.kubernetes.cluster import KubernetesClusterClient


def build_deployer(
    settings: Optional[DeployerSettings] = None,
    cluster: Optional[ClusterClient] = None,
) -> KubernetesAppDeployer:
    """
    Build a deployer.

    Args:
        settings: Deployer settings (read from the environment if omitted)
        cluster: Cluster client (Kubernetes API from settings if omitted)
    """
    settings = settings or DeployerSettings()
    cluster = cluster or KubernetesClusterClient.from_settings(settings)

    return KubernetesAppDeployer(settings=settings, cluster=cluster)
