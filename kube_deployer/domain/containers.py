# kube_deployer/domain/containers.py
"""Container factories - build the runnable container of a pod template."""

import logging
from abc import ABC, abstractmethod
from typing import List

from kubernetes.client import (
    V1Container,
    V1ContainerPort,
    V1EnvVar,
    V1HTTPGetAction,
    V1Probe,
)

from kube_deployer.config import DeployerSettings
from kube_deployer.core.errors import InvalidPropertyError
from kube_deployer.core.models import DeploymentRequest

logger = logging.getLogger(__name__)


class ContainerFactory(ABC):
    """Builds the container for an app."""

    @abstractmethod
    def create(self, app_id: str, request: DeploymentRequest, port: int) -> V1Container:
        """Create a container listening on ``port``."""
        pass


class DefaultContainerFactory(ContainerFactory):
    """
    Runs the request's image with its definition properties as arguments.

    - args: ``--key=value`` per definition property, then the request's
      command line arguments
    - env: ``KEY=value`` entries from settings
    - HTTP readiness and liveness probes on ``port``
    """

    def __init__(self, settings: DeployerSettings):
        self._settings = settings

    def create(self, app_id: str, request: DeploymentRequest, port: int) -> V1Container:
        image = request.image
        logger.info(f"Using Docker image: {image}")

        s = self._settings
        return V1Container(
            name=app_id,
            image=image,
            image_pull_policy=s.image_pull_policy,
            env=self._env_vars(),
            args=self._command_args(request),
            ports=[V1ContainerPort(container_port=port)],
            readiness_probe=self._probe(
                port,
                s.readiness_probe_path,
                s.readiness_probe_timeout,
                s.readiness_probe_delay,
                s.readiness_probe_period,
            ),
            liveness_probe=self._probe(
                port,
                s.liveness_probe_path,
                s.liveness_probe_timeout,
                s.liveness_probe_delay,
                s.liveness_probe_period,
            ),
        )

    def _env_vars(self) -> List[V1EnvVar]:
        env_vars = []
        for entry in self._settings.environment_variables:
            name, sep, value = entry.partition("=")
            if not sep or not name.strip():
                raise InvalidPropertyError("environment_variables", entry)
            env_vars.append(V1EnvVar(name=name.strip(), value=value.strip()))
        return env_vars

    @staticmethod
    def _command_args(request: DeploymentRequest) -> List[str]:
        args = [
            f"--{key}={value}"
            for key, value in request.definition.properties.items()
        ]
        args.extend(request.commandline_arguments)
        return args

    @staticmethod
    def _probe(port: int, path: str, timeout: int, delay: int, period: int) -> V1Probe:
        return V1Probe(
            http_get=V1HTTPGetAction(path=path, port=port),
            timeout_seconds=timeout,
            initial_delay_seconds=delay,
            period_seconds=period,
        )
