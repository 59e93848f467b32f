# kube_deployer/core/cluster.py

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from kubernetes.client import V1Pod, V1ReplicationController, V1Service


class ClusterClient(ABC):
    """
    Contract for the cluster API used by the deployer.
    All calls are scoped to ``namespace``.
    Implementations raise PlatformClientError (or a subclass) on API failure.
    """

    @property
    @abstractmethod
    def namespace(self) -> str:
        raise NotImplementedError

    # -------------------------
    # SERVICES
    # -------------------------

    @abstractmethod
    def create_service(self, service: V1Service) -> V1Service:
        """
        Create a service.
        Must fail with ResourceAlreadyExistsError if the name is taken.
        """
        raise NotImplementedError

    @abstractmethod
    def get_service(self, name: str) -> V1Service:
        """
        Read a service by name.
        Must fail with ResourceNotFoundError if absent.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_service(self, name: str) -> bool:
        """Delete a service. Returns True if something was deleted."""
        raise NotImplementedError

    # -------------------------
    # REPLICATION CONTROLLERS
    # -------------------------

    @abstractmethod
    def create_replication_controller(
        self,
        controller: V1ReplicationController,
    ) -> V1ReplicationController:
        """
        Create a replication controller.
        Must fail with ResourceAlreadyExistsError if the name is taken.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_replication_controller(self, name: str) -> bool:
        """Delete a replication controller. Returns True if something was deleted."""
        raise NotImplementedError

    # -------------------------
    # PODS
    # -------------------------

    @abstractmethod
    def list_pods(self, selector: Dict[str, str]) -> Optional[List[V1Pod]]:
        """
        List pods whose labels include every selector entry.
        Returns None when the platform returned no result set at all.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_pods(self, selector: Dict[str, str]) -> bool:
        """Delete every pod matching the selector."""
        raise NotImplementedError
