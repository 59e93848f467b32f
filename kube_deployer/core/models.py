"""Core domain models (deployment requests and runtime status)."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class DeploymentState(Enum):
    """Runtime state of an app or of one of its instances."""

    DEPLOYING = "deploying"
    DEPLOYED = "deployed"
    UNDEPLOYED = "undeployed"
    PARTIAL = "partial"
    FAILED = "failed"
    ERROR = "error"
    UNKNOWN = "unknown"


DOCKER_RESOURCE_SCHEME = "docker:"


# -------------------------
# REQUEST
# -------------------------

@dataclass(frozen=True)
class AppDefinition:
    """Name of the app plus its deployment-time properties."""

    name: str
    properties: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class DeploymentRequest:
    """Platform-agnostic request to deploy one app."""

    definition: AppDefinition
    resource: str
    environment_properties: Dict[str, str] = field(default_factory=dict)
    commandline_arguments: List[str] = field(default_factory=list)

    @property
    def image(self) -> str:
        """Container image reference, without a ``docker:`` scheme."""
        if self.resource.startswith(DOCKER_RESOURCE_SCHEME):
            return self.resource[len(DOCKER_RESOURCE_SCHEME):]
        return self.resource


# -------------------------
# STATUS
# -------------------------

@dataclass
class AppInstanceStatus:
    """Status of a single running instance (pod)."""

    id: str
    state: DeploymentState
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class AppStatus:
    """Status of every instance of one app, reduced to a single state."""

    deployment_id: str
    instances: Dict[str, AppInstanceStatus] = field(default_factory=dict)

    @classmethod
    def of(cls, deployment_id: str) -> "AppStatusBuilder":
        return AppStatusBuilder(deployment_id)

    @property
    def state(self) -> DeploymentState:
        """
        Reduce instance states to one app state.

        No instances -> UNKNOWN. All instances agree -> that state.
        Mixed states are resolved as ERROR, then DEPLOYING, then PARTIAL
        (some deployed), then FAILED, falling back to PARTIAL.
        """
        states = {instance.state for instance in self.instances.values()}

        if not states:
            return DeploymentState.UNKNOWN
        if len(states) == 1:
            return next(iter(states))
        if DeploymentState.ERROR in states:
            return DeploymentState.ERROR
        if DeploymentState.DEPLOYING in states:
            return DeploymentState.DEPLOYING
        if DeploymentState.DEPLOYED in states or DeploymentState.PARTIAL in states:
            return DeploymentState.PARTIAL
        if DeploymentState.FAILED in states:
            return DeploymentState.FAILED
        return DeploymentState.PARTIAL


class AppStatusBuilder:
    """Collects instance statuses for one app."""

    def __init__(self, deployment_id: str):
        self._deployment_id = deployment_id
        self._instances: Dict[str, AppInstanceStatus] = {}

    def with_instance(self, instance: AppInstanceStatus) -> "AppStatusBuilder":
        self._instances[instance.id] = instance
        return self

    def build(self) -> AppStatus:
        return AppStatus(
            deployment_id=self._deployment_id,
            instances=dict(self._instances),
        )

