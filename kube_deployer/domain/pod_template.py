# kube_deployer/domain/pod_template.py

from kubernetes.client import V1LocalObjectReference, V1PodSpec, V1ResourceRequirements

from kube_deployer.config import DeployerSettings
from kube_deployer.core.models import DeploymentRequest
from kube_deployer.domain.containers import ContainerFactory
from kube_deployer.domain.limits import deduce_resource_limits


class PodTemplateBuilder:
    """Builds the pod spec of an app's replication controller."""

    def __init__(self, settings: DeployerSettings, container_factory: ContainerFactory):
        self._settings = settings
        self._container_factory = container_factory

    def build(self, app_id: str, request: DeploymentRequest, port: int) -> V1PodSpec:
        container = self._container_factory.create(app_id, request, port)

        # memory and cpu limits
        container.resources = V1ResourceRequirements(
            limits=deduce_resource_limits(request, self._settings)
        )

        pod_spec = V1PodSpec(containers=[container])

        if self._settings.image_pull_secret is not None:
            pod_spec.image_pull_secrets = [
                V1LocalObjectReference(name=self._settings.image_pull_secret)
            ]

        return pod_spec
