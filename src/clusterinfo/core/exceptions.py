class ClusterInfoError(Exception):
    """Base exception for clusterinfo."""

    pass


class FetchError(ClusterInfoError):
    """Base exception for failures fetching a deployment's node inventory."""

    def __init__(self, message: str, deployment_id=None):
        super().__init__(message)
        self.deployment_id = deployment_id


class InventoryTransportError(FetchError):
    """Raised when the inventory service cannot be reached or answers with a server error."""

    pass


class InvalidDeploymentError(FetchError):
    """Raised when the inventory service rejects the deployment as unknown or malformed."""

    pass


class InventoryResponseError(FetchError):
    """Raised when the inventory service answers with a body that cannot be parsed."""

    pass


class ClusterTypeParseError(ClusterInfoError, ValueError):
    """Raised when a node reports a cluster type that is not recognised."""

    def __init__(self, value: str):
        super().__init__(f"Unknown cluster type '{value}'")
        self.value = value


class StorageError(ClusterInfoError):
    """Base exception for storage related errors."""

    pass


class ConnectionError(StorageError):
    """Raised when database connection fails."""

    pass


class QueryError(StorageError):
    """Raised when a database query fails."""

    pass


class LockError(ClusterInfoError):
    """Raised when an application lock is missing or does not guard the record being written."""

    pass


class LockTimeoutError(LockError):
    """Raised when an application lock cannot be acquired in time."""

    pass
