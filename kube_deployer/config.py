#kube_deployer\config.py

from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DeployerSettings(BaseSettings):
    """Deployer configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="KUBE_DEPLOYER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Cluster connection
    namespace: str = "default"
    kube_config_path: Optional[str] = None
    in_cluster: bool = False

    # Default resource limits
    memory: str = "512Mi"
    cpu: str = "500m"

    # Pod template
    image_pull_secret: Optional[str] = None
    image_pull_policy: str = "IfNotPresent"
    environment_variables: List[str] = []

    # Service
    create_load_balancer: bool = False

    # Probes
    liveness_probe_path: str = "/health"
    liveness_probe_delay: int = 10
    liveness_probe_period: int = 60
    liveness_probe_timeout: int = 2
    readiness_probe_path: str = "/info"
    readiness_probe_delay: int = 10
    readiness_probe_period: int = 10
    readiness_probe_timeout: int = 2

    # Instance status
    max_terminated_error_restarts: int = 2
    max_crash_loop_back_off_restarts: int = 4

    # Undeploy
    load_balancer_wait_attempts: int = 30
    load_balancer_wait_seconds: float = 10.0

    # HTTP API
    api_host: str = "0.0.0.0"
    api_port: int = 9000

    @field_validator("environment_variables")
    @classmethod
    def validate_environment_variables(cls, entries: List[str]) -> List[str]:
        """Each entry must be KEY=value with a non-empty key."""
        for entry in entries:
            name, sep, _ = entry.partition("=")
            if not sep or not name.strip():
                raise ValueError(f"Malformed environment variable: {entry!r}")
        return entries
