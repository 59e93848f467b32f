# kube_deployer/infrastructure/memory/cluster.py

import copy
from threading import Lock
from typing import Dict, List, Optional

from kubernetes.client import (
    V1ContainerStatus,
    V1LoadBalancerStatus,
    V1ObjectMeta,
    V1Pod,
    V1PodStatus,
    V1ReplicationController,
    V1Service,
    V1ServiceStatus,
)

from kube_deployer.core.cluster import ClusterClient
from kube_deployer.core.errors import ResourceAlreadyExistsError, ResourceNotFoundError


def _matches(labels: Optional[Dict[str, str]], selector: Dict[str, str]) -> bool:
    labels = labels or {}
    return all(labels.get(key) == value for key, value in selector.items())


class InMemoryClusterClient(ClusterClient):
    """
    Cluster held in process memory.

    Nothing is scheduled on its own: call ``schedule_pods`` to simulate the
    platform starting the pods of a replication controller.
    """

    def __init__(self, namespace: str = "default"):
        self._namespace = namespace
        self._services: Dict[str, V1Service] = {}
        self._controllers: Dict[str, V1ReplicationController] = {}
        self._pods: Dict[str, V1Pod] = {}
        self._lock = Lock()

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def services(self) -> Dict[str, V1Service]:
        return dict(self._services)

    @property
    def replication_controllers(self) -> Dict[str, V1ReplicationController]:
        return dict(self._controllers)

    @property
    def pods(self) -> Dict[str, V1Pod]:
        return dict(self._pods)

    # -------------------------
    # SERVICES
    # -------------------------

    def create_service(self, service: V1Service) -> V1Service:
        with self._lock:
            name = service.metadata.name
            if name in self._services:
                raise ResourceAlreadyExistsError(
                    f"Service {name} already exists", status=409, reason="Conflict"
                )
            stored = copy.deepcopy(service)
            if stored.status is None:
                stored.status = V1ServiceStatus(load_balancer=V1LoadBalancerStatus())
            self._services[name] = stored
            return stored

    def get_service(self, name: str) -> V1Service:
        service = self._services.get(name)
        if service is None:
            raise ResourceNotFoundError(
                f"Service {name} not found", status=404, reason="Not Found"
            )
        return service

    def delete_service(self, name: str) -> bool:
        with self._lock:
            return self._services.pop(name, None) is not None

    # -------------------------
    # REPLICATION CONTROLLERS
    # -------------------------

    def create_replication_controller(
        self,
        controller: V1ReplicationController,
    ) -> V1ReplicationController:
        with self._lock:
            name = controller.metadata.name
            if name in self._controllers:
                raise ResourceAlreadyExistsError(
                    f"Replication controller {name} already exists",
                    status=409,
                    reason="Conflict",
                )
            stored = copy.deepcopy(controller)
            self._controllers[name] = stored
            return stored

    def delete_replication_controller(self, name: str) -> bool:
        with self._lock:
            return self._controllers.pop(name, None) is not None

    # -------------------------
    # PODS
    # -------------------------

    def list_pods(self, selector: Dict[str, str]) -> Optional[List[V1Pod]]:
        return [
            pod for pod in self._pods.values()
            if _matches(pod.metadata.labels, selector)
        ]

    def delete_pods(self, selector: Dict[str, str]) -> bool:
        with self._lock:
            names = [
                name for name, pod in self._pods.items()
                if _matches(pod.metadata.labels, selector)
            ]
            for name in names:
                del self._pods[name]
            return bool(names)

    # -------------------------
    # SIMULATION
    # -------------------------

    def schedule_pods(
        self,
        controller_name: str,
        phase: str = "Running",
        ready: bool = True,
    ) -> List[V1Pod]:
        """Start one pod per replica of a replication controller."""
        with self._lock:
            controller = self._controllers.get(controller_name)
            if controller is None:
                raise ResourceNotFoundError(
                    f"Replication controller {controller_name} not found",
                    status=404,
                    reason="Not Found",
                )

            template = controller.spec.template
            scheduled = []
            for index in range(controller.spec.replicas or 0):
                pod = V1Pod(
                    metadata=V1ObjectMeta(
                        name=f"{controller_name}-{index}",
                        namespace=self._namespace,
                        labels=dict(template.metadata.labels or {}),
                    ),
                    spec=template.spec,
                    status=V1PodStatus(
                        phase=phase,
                        container_statuses=[
                            V1ContainerStatus(
                                name=controller_name,
                                image=template.spec.containers[0].image,
                                image_id="",
                                ready=ready,
                                restart_count=0,
                            )
                        ],
                    ),
                )
                self._pods[pod.metadata.name] = pod
                scheduled.append(pod)
            return scheduled

    def set_load_balancer_ingress(self, name: str, ingress: Optional[list]) -> None:
        """Set the reported load balancer ingress of a service."""
        service = self.get_service(name)
        service.status = V1ServiceStatus(
            load_balancer=V1LoadBalancerStatus(ingress=ingress)
        )
