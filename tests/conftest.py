#tests\conftest.py

"""Pytest configuration and fixtures."""

import pytest

from kube_deployer.config import DeployerSettings
from kube_deployer.core.models import AppDefinition, DeploymentRequest
from kube_deployer.deployer import KubernetesAppDeployer
from kube_deployer.infrastructure.memory.cluster import InMemoryClusterClient


@pytest.fixture
def settings():
    """Settings with the documented defaults, isolated from the environment."""
    return DeployerSettings(
        _env_file=None,
        namespace="test",
        memory="512Mi",
        cpu="500m",
        image_pull_secret=None,
        create_load_balancer=False,
        environment_variables=[],
        load_balancer_wait_attempts=30,
        load_balancer_wait_seconds=10.0,
    )


@pytest.fixture
def cluster():
    """Create an empty in-memory cluster."""
    return InMemoryClusterClient(namespace="test")


@pytest.fixture
def deployer(settings, cluster):
    """Create deployer against the in-memory cluster."""
    return KubernetesAppDeployer(settings=settings, cluster=cluster)


@pytest.fixture
def make_request():
    """Factory for deployment requests."""
    def _make(
        name="time",
        properties=None,
        environment_properties=None,
        resource="docker:springcloud/time-source:latest",
        commandline_arguments=None,
    ):
        return DeploymentRequest(
            definition=AppDefinition(name=name, properties=properties or {}),
            resource=resource,
            environment_properties=environment_properties or {},
            commandline_arguments=commandline_arguments or [],
        )
    return _make
