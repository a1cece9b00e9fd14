"""Provider-agnostic exception types.

Provider modules translate SDK-specific failures into these exceptions so the
CLI layer can map them to actionable messages without importing botocore.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for cloud provider failures."""


class ProviderCredentialsError(ProviderError):
    """Credentials are missing, expired, or the profile cannot be loaded."""


class ProviderAPIError(ProviderError):
    """Cloud API call rejected by the provider.

    Parameters
    ----------
    message : str
        Human-readable error message
    error_code : str | None
        Provider error code (e.g. ``UnauthorizedOperation``)
    operation_name : str | None
        API operation that failed, when known
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        operation_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.operation_name = operation_name


class ProviderConnectionError(ProviderError):
    """Provider endpoint could not be reached."""


class InstanceNotFoundError(ValueError):
    """No running instance carries the requested Name tag."""

    def __init__(self, name: str) -> None:
        super().__init__(f"there are no running instances with Name tag: {name}")
        self.name = name


class AmbiguousInstanceError(ValueError):
    """More than one running instance carries the requested Name tag."""

    def __init__(self, name: str, instance_ids: list[str]) -> None:
        super().__init__(
            f"there are multiple running instances with Name tag '{name}': "
            f"{', '.join(instance_ids)}"
        )
        self.name = name
        self.instance_ids = instance_ids
