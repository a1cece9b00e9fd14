"""Translation of botocore failures into provider exceptions."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    CredentialRetrievalError,
    EndpointConnectionError,
    NoCredentialsError,
    NoRegionError,
    PartialCredentialsError,
    ProfileNotFound,
    ReadTimeoutError,
    SSOError,
    SSOTokenLoadError,
    TokenRetrievalError,
    UnauthorizedSSOTokenError,
)

from aws_ec2_ssh.providers.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
)

logger = logging.getLogger(__name__)

EXPIRED_CREDENTIAL_CODES = frozenset(
    ("ExpiredToken", "ExpiredTokenException", "InvalidClientTokenId", "RequestExpired")
)

ACCESS_DENIED_CODES = frozenset(
    (
        "AccessDenied",
        "AccessDeniedException",
        "UnauthorizedOperation",
        "UnrecognizedClientException",
    )
)

CANCELED_CODES = frozenset(("RequestCanceled",))

SSO_EXPIRED_MARKERS = (
    "the SSO session has expired or is invalid",
    "The SSO session associated with this profile has expired",
    "SSO session token is invalid",
    "Error loading SSO Token",
    "Error when retrieving token from sso",
)

MISSING_CREDENTIAL_MARKERS = (
    "Unable to locate credentials",
    "NoCredentialProviders",
    "Partial credentials found",
)


@contextmanager
def handle_aws_errors() -> Iterator[None]:
    """Convert botocore exceptions raised in the block to provider exceptions.

    Raises
    ------
    ProviderCredentialsError
        If credentials are missing, expired SSO tokens, or unknown profile
    ProviderAPIError
        If the service rejected the request, or on any other botocore
        failure such as invalid parameters or config
    ProviderConnectionError
        If the endpoint could not be reached
    """
    try:
        yield
    except (
        NoCredentialsError,
        PartialCredentialsError,
        ProfileNotFound,
        SSOTokenLoadError,
        UnauthorizedSSOTokenError,
        SSOError,
        TokenRetrievalError,
        CredentialRetrievalError,
    ) as e:
        raise ProviderCredentialsError(str(e)) from e
    except NoRegionError as e:
        raise ProviderAPIError(
            "No AWS region configured. Pass --region or set AWS_REGION.",
            error_code="NoRegion",
        ) from e
    except ClientError as e:
        error = e.response.get("Error", {})
        code = error.get("Code")
        message = error.get("Message") or str(e)
        logger.debug("AWS API error in %s: %s (%s)", e.operation_name, message, code)
        raise ProviderAPIError(
            message, error_code=code, operation_name=e.operation_name
        ) from e
    except (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError) as e:
        raise ProviderConnectionError(str(e)) from e
    except BotoCoreError as e:
        raise ProviderAPIError(str(e)) from e


def describe_credentials_error(error: Exception, profile: str | None) -> list[str]:
    """Build actionable messages for a credentials failure.

    Parameters
    ----------
    error : Exception
        The credentials error
    profile : str | None
        Profile in use, shown in the suggested fix

    Returns
    -------
    list[str]
        Lines to log, most important first
    """
    profile_name = profile or "default"
    message = str(error)

    if any(marker in message for marker in SSO_EXPIRED_MARKERS):
        return [
            "Your AWS SSO session has expired or is invalid.",
            f"Run: aws sso login --profile {profile_name}",
        ]

    if any(marker in message for marker in MISSING_CREDENTIAL_MARKERS):
        return [
            f"No AWS credentials found for profile '{profile_name}'.",
            f"Configure credentials with: aws configure --profile {profile_name}",
        ]

    return [f"AWS credentials error: {message}"]


def describe_api_error(error: ProviderAPIError, profile: str | None) -> list[str]:
    """Build actionable messages for a rejected API call.

    Parameters
    ----------
    error : ProviderAPIError
        The API error
    profile : str | None
        Profile in use, shown in the suggested fix

    Returns
    -------
    list[str]
        Lines to log, most important first
    """
    profile_name = profile or "default"
    code = error.error_code

    if code in EXPIRED_CREDENTIAL_CODES:
        return [
            "Your AWS credentials have expired or are invalid.",
            f"Run: aws sso login --profile {profile_name}",
        ]

    if code in ACCESS_DENIED_CODES:
        return [
            f"Access denied: {error}",
            f"Check your IAM permissions or AWS account. (profile: {profile_name})",
        ]

    if code in CANCELED_CODES:
        return ["AWS request was canceled (possible credential/config timeout)."]

    if code:
        return [f"AWS error ({code}): {error}"]

    return [f"AWS error: {error}"]
