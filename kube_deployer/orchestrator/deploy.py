# kube_deployer/orchestrator/deploy.py
"""Deploy orchestrator - creates the service and replication controller of an app."""

import logging
from typing import Dict

from kubernetes.client import (
    V1ObjectMeta,
    V1PodTemplateSpec,
    V1ReplicationController,
    V1ReplicationControllerSpec,
    V1Service,
    V1ServicePort,
    V1ServiceSpec,
)

from kube_deployer.config import DeployerSettings
from kube_deployer.core.cluster import ClusterClient
from kube_deployer.core.errors import (
    DeploymentConflictError,
    InvalidPropertyError,
    ResourceAlreadyExistsError,
)
from kube_deployer.core.models import DeploymentRequest, DeploymentState
from kube_deployer.domain.identity import (
    COUNT_PROPERTY_KEY,
    SERVER_PORT_KEY,
    create_deployment_id,
    create_id_map,
    create_labels,
)
from kube_deployer.domain.pod_template import PodTemplateBuilder
from kube_deployer.status.aggregator import StatusAggregator

logger = logging.getLogger(__name__)


DEFAULT_PORT = 8080
DEFAULT_COUNT = 1
LOAD_BALANCER = "LoadBalancer"


class DeployOrchestrator:
    """
    Deploys one app.

    Flow:
    1. Derive app id and labels
    2. Reject the request if any pod of the app exists
    3. Create the service exposing the port
    4. Create the replication controller bound to it

    Nothing is rolled back: if step 4 fails the service stays until the
    app is undeployed.
    """

    def __init__(
        self,
        settings: DeployerSettings,
        cluster: ClusterClient,
        status_aggregator: StatusAggregator,
        pod_template_builder: PodTemplateBuilder,
    ):
        self._settings = settings
        self._cluster = cluster
        self._status_aggregator = status_aggregator
        self._pod_template_builder = pod_template_builder

    def deploy(self, request: DeploymentRequest) -> str:
        app_id = create_deployment_id(request)
        id_map = create_id_map(app_id, request)

        logger.debug(f"Deploying app: {app_id}")

        status = self._status_aggregator.status(app_id)
        if status.state != DeploymentState.UNKNOWN:
            raise DeploymentConflictError(app_id)

        external_port = _int_property(
            request.definition.properties, SERVER_PORT_KEY, DEFAULT_PORT
        )
        count = _int_property(
            request.environment_properties, COUNT_PROPERTY_KEY, DEFAULT_COUNT
        )

        # Both resources are built before either is created, so a bad pod
        # template never leaves a service behind.
        service = self._build_service(app_id, id_map, external_port)
        controller = self._build_replication_controller(
            app_id, request, id_map, external_port, count
        )

        # The pre-check above races with concurrent deployers; name
        # uniqueness on create is the authoritative guard.
        try:
            logger.debug(f"Creating service: {app_id} on {external_port}")
            self._cluster.create_service(service)

            logger.debug(f"Creating repl controller: {app_id} on {external_port}")
            self._cluster.create_replication_controller(controller)
        except ResourceAlreadyExistsError as e:
            raise DeploymentConflictError(app_id) from e

        logger.info(f"Deployed app: {app_id} ({count} replica(s) on port {external_port})")
        return app_id

    def _build_service(self, app_id: str, id_map: Dict[str, str], port: int) -> V1Service:
        spec = V1ServiceSpec(
            selector=id_map,
            ports=[V1ServicePort(port=port)],
        )
        if self._settings.create_load_balancer:
            spec.type = LOAD_BALANCER

        return V1Service(
            api_version="v1",
            kind="Service",
            metadata=V1ObjectMeta(
                name=app_id,
                namespace=self._cluster.namespace,
                labels=create_labels(id_map),
            ),
            spec=spec,
        )

    def _build_replication_controller(
        self,
        app_id: str,
        request: DeploymentRequest,
        id_map: Dict[str, str],
        port: int,
        count: int,
    ) -> V1ReplicationController:
        labels = create_labels(id_map)

        return V1ReplicationController(
            api_version="v1",
            kind="ReplicationController",
            metadata=V1ObjectMeta(
                name=app_id,
                namespace=self._cluster.namespace,
                labels=labels,
            ),
            spec=V1ReplicationControllerSpec(
                replicas=count,
                selector=dict(id_map),
                template=V1PodTemplateSpec(
                    metadata=V1ObjectMeta(labels=dict(labels)),
                    spec=self._pod_template_builder.build(app_id, request, port),
                ),
            ),
        )


def _int_property(properties: Dict[str, str], key: str, default: int) -> int:
    """Parse an integer property. Absent -> default, malformed -> error."""
    value = properties.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidPropertyError(key, value)
