"""Cloud provider integrations and their shared exception types."""

from __future__ import annotations

from aws_ec2_ssh.providers.exceptions import (
    AmbiguousInstanceError,
    InstanceNotFoundError,
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
    ProviderError,
)

__all__ = [
    "ProviderError",
    "ProviderCredentialsError",
    "ProviderAPIError",
    "ProviderConnectionError",
    "InstanceNotFoundError",
    "AmbiguousInstanceError",
]
