# kube_deployer/orchestrator/undeploy.py
"""Undeploy orchestrator - tears down the resources of an app."""

import logging
import time

from kubernetes.client import V1Service

from kube_deployer.config import DeployerSettings
from kube_deployer.core.cluster import ClusterClient
from kube_deployer.core.errors import (
    PlatformClientError,
    ResourceNotFoundError,
    UndeployError,
)
from kube_deployer.domain.identity import app_selector
from kube_deployer.orchestrator.deploy import LOAD_BALANCER

logger = logging.getLogger(__name__)


class UndeployOrchestrator:
    """
    Undeploys one app.

    Flow:
    1. If the service has a load balancer, wait for its ingress pool
       to drain (bounded by settings)
    2. Delete the service
    3. Delete the replication controller
    4. Delete the pods

    Steps completed before a failure are not undone.
    """

    def __init__(self, settings: DeployerSettings, cluster: ClusterClient):
        self._settings = settings
        self._cluster = cluster

    def undeploy(self, app_id: str) -> None:
        logger.debug(f"Undeploying app: {app_id}")

        try:
            # A missing service means an earlier undeploy got part way;
            # carry on with the remaining deletes.
            try:
                service = self._cluster.get_service(app_id)
            except ResourceNotFoundError:
                logger.debug(f"No service for: {app_id}")
                service = None

            if service is not None and service.spec is not None and service.spec.type == LOAD_BALANCER:
                self._wait_for_load_balancer(app_id, service)

            svc_deleted = self._cluster.delete_service(app_id)
            logger.debug(f"Deleted service for: {app_id} {svc_deleted}")

            rc_deleted = self._cluster.delete_replication_controller(app_id)
            logger.debug(f"Deleted replication controller for: {app_id} {rc_deleted}")

            pods_deleted = self._cluster.delete_pods(app_selector(app_id))
            logger.debug(f"Deleted pods for: {app_id} {pods_deleted}")

        except PlatformClientError as e:
            logger.error(f"Undeploy of {app_id} failed: {e}", exc_info=True)
            raise UndeployError(app_id) from e

        logger.info(f"Undeployed app: {app_id}")

    def _wait_for_load_balancer(self, app_id: str, service: V1Service) -> None:
        """Best-effort wait; deletion proceeds whatever the outcome."""
        tries = 0
        while tries < self._settings.load_balancer_wait_attempts:
            tries += 1
            if not _ingress_pending(service):
                break

            logger.debug(f"Waiting for LoadBalancer, try {tries}")
            # CPython retries an interrupted sleep itself (PEP 475); this
            # only fires when sleep is replaced by one that raises.
            try:
                time.sleep(self._settings.load_balancer_wait_seconds)
            except InterruptedError:
                logger.warning(f"Interrupted while waiting for LoadBalancer of {app_id}")
            service = self._cluster.get_service(app_id)

        logger.debug(f"LoadBalancer Ingress: {_ingress(service)}")


def _ingress(service: V1Service):
    status = service.status
    if status is None or status.load_balancer is None:
        return None
    return status.load_balancer.ingress


def _ingress_pending(service: V1Service) -> bool:
    """Load balancer status reported with an empty ingress list."""
    ingress = _ingress(service)
    return ingress is not None and len(ingress) == 0
