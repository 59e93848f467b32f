# kube_deployer/core/errors.py

# -----------------------------
# Base Errors
# -----------------------------

class DeployerError(Exception):
    """Base class for all deployer errors."""
    pass


# -----------------------------
# Request / Lifecycle Errors
# -----------------------------

class DeploymentConflictError(DeployerError):
    """An app with the same deployment id already has resources in the cluster."""

    def __init__(self, app_id: str):
        super().__init__(f"App '{app_id}' is already deployed")
        self.app_id = app_id


class InvalidPropertyError(DeployerError, ValueError):
    """A request property could not be parsed."""

    def __init__(self, key: str, value: str):
        super().__init__(f"Invalid value for property '{key}': {value!r}")
        self.key = key
        self.value = value


class UndeployError(DeployerError):
    """Undeploy aborted part way; some resources may remain."""

    def __init__(self, app_id: str):
        super().__init__(f"Failed to undeploy app '{app_id}'")
        self.app_id = app_id


# -----------------------------
# Platform Errors
# -----------------------------

class PlatformClientError(DeployerError):
    """Cluster API call failed."""

    def __init__(self, message: str, status: int | None = None, reason: str | None = None):
        super().__init__(message)
        self.status = status
        self.reason = reason


class ResourceAlreadyExistsError(PlatformClientError):
    pass


class ResourceNotFoundError(PlatformClientError):
    pass
