# kube_deployer/infrastructure/kubernetes/cluster.py
"""Cluster client backed by the Kubernetes API."""

import logging
from typing import Dict, List, Optional

from kubernetes import client, config
from kubernetes.client import V1Pod, V1ReplicationController, V1Service
from kubernetes.client.exceptions import ApiException

from kube_deployer.config import DeployerSettings
from kube_deployer.core.cluster import ClusterClient
from kube_deployer.core.errors import (
    PlatformClientError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)


def to_label_selector(selector: Dict[str, str]) -> str:
    """{'a': 'x', 'b': 'y'} -> 'a=x,b=y'"""
    return ",".join(f"{key}={value}" for key, value in sorted(selector.items()))


def platform_error(e: ApiException, action: str) -> PlatformClientError:
    """Translate an API exception into a deployer error."""
    message = f"Failed to {action}: {e.status} {e.reason}"
    if e.status == 409:
        return ResourceAlreadyExistsError(message, status=e.status, reason=e.reason)
    if e.status == 404:
        return ResourceNotFoundError(message, status=e.status, reason=e.reason)
    return PlatformClientError(message, status=e.status, reason=e.reason)


class KubernetesClusterClient(ClusterClient):
    """ClusterClient over ``CoreV1Api``."""

    def __init__(self, core_v1: client.CoreV1Api, namespace: str = "default"):
        self._core_v1 = core_v1
        self._namespace = namespace

    @classmethod
    def from_settings(cls, settings: DeployerSettings) -> "KubernetesClusterClient":
        """Load in-cluster or kubeconfig credentials and build a client."""
        if settings.in_cluster:
            config.load_incluster_config()
        else:
            config.load_kube_config(config_file=settings.kube_config_path)

        logger.info(f"Initialized KubernetesClusterClient for namespace {settings.namespace}")
        return cls(client.CoreV1Api(), namespace=settings.namespace)

    @property
    def namespace(self) -> str:
        return self._namespace

    # -------------------------
    # SERVICES
    # -------------------------

    def create_service(self, service: V1Service) -> V1Service:
        try:
            return self._core_v1.create_namespaced_service(self._namespace, service)
        except ApiException as e:
            raise platform_error(e, f"create service {service.metadata.name}") from e

    def get_service(self, name: str) -> V1Service:
        try:
            return self._core_v1.read_namespaced_service(name, self._namespace)
        except ApiException as e:
            raise platform_error(e, f"read service {name}") from e

    def delete_service(self, name: str) -> bool:
        try:
            self._core_v1.delete_namespaced_service(name, self._namespace)
            return True
        except ApiException as e:
            if e.status == 404:
                return False
            raise platform_error(e, f"delete service {name}") from e

    # -------------------------
    # REPLICATION CONTROLLERS
    # -------------------------

    def create_replication_controller(
        self,
        controller: V1ReplicationController,
    ) -> V1ReplicationController:
        try:
            return self._core_v1.create_namespaced_replication_controller(
                self._namespace, controller
            )
        except ApiException as e:
            raise platform_error(
                e, f"create replication controller {controller.metadata.name}"
            ) from e

    def delete_replication_controller(self, name: str) -> bool:
        try:
            self._core_v1.delete_namespaced_replication_controller(name, self._namespace)
            return True
        except ApiException as e:
            if e.status == 404:
                return False
            raise platform_error(e, f"delete replication controller {name}") from e

    # -------------------------
    # PODS
    # -------------------------

    def list_pods(self, selector: Dict[str, str]) -> Optional[List[V1Pod]]:
        try:
            pod_list = self._core_v1.list_namespaced_pod(
                self._namespace,
                label_selector=to_label_selector(selector),
            )
        except ApiException as e:
            raise platform_error(e, "list pods") from e

        if pod_list is None:
            return None
        return list(pod_list.items or [])

    def delete_pods(self, selector: Dict[str, str]) -> bool:
        try:
            self._core_v1.delete_collection_namespaced_pod(
                self._namespace,
                label_selector=to_label_selector(selector),
            )
            return True
        except ApiException as e:
            if e.status == 404:
                return False
            raise platform_error(e, "delete pods") from e
