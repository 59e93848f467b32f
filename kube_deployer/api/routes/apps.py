from fastapi import APIRouter, Depends, HTTPException, Response, status

from kube_deployer.api.container import get_deployer
from kube_deployer.api.schemas.app import (
    AppDeployRequest,
    AppDeployResponse,
    AppInstanceResponse,
    AppStatusResponse,
)
from kube_deployer.core.errors import (
    DeploymentConflictError,
    InvalidPropertyError,
    PlatformClientError,
    UndeployError,
)
from kube_deployer.core.models import AppDefinition, DeploymentRequest

router = APIRouter(prefix="/apps", tags=["apps"])


@router.post("/", response_model=AppDeployResponse, status_code=status.HTTP_201_CREATED)
def deploy_app(
    request: AppDeployRequest,
    deployer=Depends(get_deployer),
):
    deployment_request = DeploymentRequest(
        definition=AppDefinition(name=request.name, properties=request.properties),
        resource=request.resource,
        environment_properties=request.environment_properties,
        commandline_arguments=request.commandline_arguments,
    )

    try:
        app_id = deployer.deploy(deployment_request)

    except DeploymentConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidPropertyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PlatformClientError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return AppDeployResponse(app_id=app_id)


@router.get("/{app_id}", response_model=AppStatusResponse)
def get_app_status(
    app_id: str,
    deployer=Depends(get_deployer),
):
    try:
        app_status = deployer.status(app_id)
    except PlatformClientError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return AppStatusResponse(
        app_id=app_status.deployment_id,
        state=app_status.state.value,
        instances=[
            AppInstanceResponse(
                id=instance.id,
                state=instance.state.value,
                attributes=instance.attributes,
            )
            for instance in app_status.instances.values()
        ],
    )


@router.delete("/{app_id}", status_code=status.HTTP_204_NO_CONTENT)
def undeploy_app(
    app_id: str,
    deployer=Depends(get_deployer),
):
    try:
        deployer.undeploy(app_id)
    except UndeployError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)
