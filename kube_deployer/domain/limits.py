# kube_deployer/domain/limits.py

import logging
from typing import Dict

from kube_deployer.config import DeployerSettings
from kube_deployer.core.models import DeploymentRequest

logger = logging.getLogger(__name__)


MEMORY_PROPERTY_KEY = "deployer.kubernetes.memory"
CPU_PROPERTY_KEY = "deployer.kubernetes.cpu"


def deduce_resource_limits(
    request: DeploymentRequest,
    settings: DeployerSettings,
) -> Dict[str, str]:
    """
    Resolve container limits.

    Request overrides win over the configured defaults. Quantities are
    passed through unchecked; the cluster rejects malformed ones.
    """
    env = request.environment_properties

    memory = env.get(MEMORY_PROPERTY_KEY)
    if memory is None:
        memory = settings.memory

    cpu = env.get(CPU_PROPERTY_KEY)
    if cpu is None:
        cpu = settings.cpu

    logger.debug(f"Using limits - cpu: {cpu} mem: {memory}")

    return {"memory": memory, "cpu": cpu}
