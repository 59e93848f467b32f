# kube_deployer/status/instance_status.py
"""Per-pod status classification."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from kubernetes.client import V1ContainerStatus, V1Pod

from kube_deployer.config import DeployerSettings
from kube_deployer.core.models import AppInstanceStatus, DeploymentState

logger = logging.getLogger(__name__)


# Exit codes of containers killed by the kubelet (SIGKILL, SIGTERM)
KILLED_EXIT_CODES = {137, 143}


class InstanceStatusClassifier(ABC):
    """Maps one pod (or its absence) to an instance status."""

    @abstractmethod
    def classify(self, app_id: str, pod: Optional[V1Pod]) -> AppInstanceStatus:
        pass


class KubernetesInstanceStatusClassifier(InstanceStatusClassifier):
    """
    Classifies a pod from its phase and first container status.

    A running pod is only DEPLOYED once its container is ready. Containers
    that keep getting killed or crash-looping past the configured restart
    thresholds are FAILED.
    """

    def __init__(self, settings: DeployerSettings):
        self._settings = settings

    def classify(self, app_id: str, pod: Optional[V1Pod]) -> AppInstanceStatus:
        if pod is None:
            return AppInstanceStatus(
                id=f"{app_id}-absent",
                state=DeploymentState.UNKNOWN,
            )

        return AppInstanceStatus(
            id=pod.metadata.name,
            state=self._map_state(pod),
            attributes=self._attributes(pod),
        )

    def _map_state(self, pod: V1Pod) -> DeploymentState:
        phase = pod.status.phase if pod.status else None
        container_status = self._container_status(pod)

        logger.debug(f"{pod.metadata.name} - Phase [ {phase} ]")
        logger.debug(f"{pod.metadata.name} - ContainerStatus [ {container_status} ]")

        if phase == "Pending":
            return DeploymentState.DEPLOYING
        if phase == "Failed":
            return DeploymentState.FAILED
        if phase == "Succeeded":
            return DeploymentState.UNDEPLOYED
        if phase != "Running":
            return DeploymentState.UNKNOWN

        if container_status is None:
            return DeploymentState.DEPLOYING
        if container_status.ready:
            return DeploymentState.DEPLOYED
        if self._repeatedly_terminated(container_status):
            return DeploymentState.FAILED
        if self._crash_looping(container_status):
            return DeploymentState.FAILED
        return DeploymentState.DEPLOYING

    @staticmethod
    def _container_status(pod: V1Pod) -> Optional[V1ContainerStatus]:
        # one container per pod
        if pod.status and pod.status.container_statuses:
            return pod.status.container_statuses[0]
        return None

    def _repeatedly_terminated(self, status: V1ContainerStatus) -> bool:
        if (status.restart_count or 0) <= self._settings.max_terminated_error_restarts:
            return False

        last = status.last_state.terminated if status.last_state else None
        if last is None:
            return False

        # OOM killed or too much cpu
        if last.exit_code in KILLED_EXIT_CODES:
            return True

        current = status.state.terminated if status.state else None
        return (
            current is not None
            and "Error" in (last.reason or "")
            and "Error" in (current.reason or "")
        )

    def _crash_looping(self, status: V1ContainerStatus) -> bool:
        if (status.restart_count or 0) <= self._settings.max_crash_loop_back_off_restarts:
            return False

        waiting = status.state.waiting if status.state else None
        return waiting is not None and "CrashLoopBackOff" in (waiting.reason or "")

    @staticmethod
    def _attributes(pod: V1Pod) -> Dict[str, str]:
        attributes = {"pod_name": pod.metadata.name}
        status = pod.status
        if status is None:
            return attributes

        if status.phase:
            attributes["pod_phase"] = status.phase
        if status.pod_ip:
            attributes["pod_ip"] = status.pod_ip
        if status.host_ip:
            attributes["host_ip"] = status.host_ip
        if status.start_time:
            attributes["pod_start_time"] = status.start_time.isoformat()
        return attributes
