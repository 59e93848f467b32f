from typing import Dict, List
from pydantic import BaseModel, Field


class AppDeployRequest(BaseModel):
    name: str
    resource: str = Field(..., description="Container image (e.g., 'docker:nginx:alpine')")
    properties: Dict[str, str] = Field(default_factory=dict, description="Deployment-time properties")
    environment_properties: Dict[str, str] = Field(default_factory=dict, description="Deployer properties (count, group, limits)")
    commandline_arguments: List[str] = Field(default_factory=list)


class AppDeployResponse(BaseModel):
    app_id: str


class AppInstanceResponse(BaseModel):
    id: str
    state: str
    attributes: Dict[str, str]


class AppStatusResponse(BaseModel):
    app_id: str
    state: str
    instances: List[AppInstanceResponse]
