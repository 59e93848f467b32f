# kube_deployer/domain/identity.py
"""Deployment id and label derivation."""

from typing import Dict

from kube_deployer.core.models import DeploymentRequest


# Well-known request properties
GROUP_PROPERTY_KEY = "deployer.group"
COUNT_PROPERTY_KEY = "deployer.count"
SERVER_PORT_KEY = "server.port"

# Labels
DEPLOYMENT_LABEL = "deployer-deployment-id"
GROUP_LABEL = "deployer-group-id"
APP_LABEL = "deployer-app-id"
MARKER_LABEL = "role"
MARKER_VALUE = "deployer-app"


def create_deployment_id(request: DeploymentRequest) -> str:
    """Build the app id used as the name of every cluster resource."""
    group_id = request.environment_properties.get(GROUP_PROPERTY_KEY)
    name = request.definition.name

    if group_id is None:
        deployment_id = name
    else:
        deployment_id = f"{group_id}-{name}"

    # Kubernetes does not allow . in resource names
    return deployment_id.replace(".", "-")


def create_id_map(app_id: str, request: DeploymentRequest) -> Dict[str, str]:
    """
    Labels that tie a service to its replication controller and pods.

    Used both as resource labels and as the selector.
    """
    id_map = {APP_LABEL: app_id}

    group_id = request.environment_properties.get(GROUP_PROPERTY_KEY)
    if group_id is not None:
        id_map[GROUP_LABEL] = group_id

    id_map[DEPLOYMENT_LABEL] = create_deployment_id(request)
    return id_map


def create_labels(id_map: Dict[str, str]) -> Dict[str, str]:
    """Resource labels: the id map plus the ownership marker."""
    return {**id_map, MARKER_LABEL: MARKER_VALUE}


def app_selector(app_id: str) -> Dict[str, str]:
    """Selector matching every pod of an app."""
    return {APP_LABEL: app_id}
