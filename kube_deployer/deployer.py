# kube_deployer/deployer.py
"""Kubernetes app deployer - deploy, undeploy and status of apps."""

from typing import Optional

from kube_deployer.config import DeployerSettings
from kube_deployer.core.cluster import ClusterClient
from kube_deployer.core.models import AppStatus, DeploymentRequest
from kube_deployer.domain.containers import ContainerFactory, DefaultContainerFactory
from kube_deployer.domain.pod_template import PodTemplateBuilder
from kube_deployer.orchestrator.deploy import DeployOrchestrator
from kube_deployer.orchestrator.undeploy import UndeployOrchestrator
from kube_deployer.status.aggregator import StatusAggregator
from kube_deployer.status.instance_status import (
    InstanceStatusClassifier,
    KubernetesInstanceStatusClassifier,
)


class KubernetesAppDeployer:
    """
    Deploys apps as a service plus a replication controller.

    Holds no state between calls; everything is read back from the cluster.
    The container factory and status classifier are swappable.
    """

    def __init__(
        self,
        settings: DeployerSettings,
        cluster: ClusterClient,
        container_factory: Optional[ContainerFactory] = None,
        classifier: Optional[InstanceStatusClassifier] = None,
    ):
        self._settings = settings
        self._cluster = cluster

        container_factory = container_factory or DefaultContainerFactory(settings)
        classifier = classifier or KubernetesInstanceStatusClassifier(settings)

        self._status_aggregator = StatusAggregator(cluster, classifier)
        self._deploy_orchestrator = DeployOrchestrator(
            settings=settings,
            cluster=cluster,
            status_aggregator=self._status_aggregator,
            pod_template_builder=PodTemplateBuilder(settings, container_factory),
        )
        self._undeploy_orchestrator = UndeployOrchestrator(settings, cluster)

    def deploy(self, request: DeploymentRequest) -> str:
        """Deploy an app. Returns its app id."""
        return self._deploy_orchestrator.deploy(request)

    def undeploy(self, app_id: str) -> None:
        """Remove the service, replication controller and pods of an app."""
        self._undeploy_orchestrator.undeploy(app_id)

    def status(self, app_id: str) -> AppStatus:
        """Current status of an app, rebuilt from its pods."""
        return self._status_aggregator.status(app_id)
