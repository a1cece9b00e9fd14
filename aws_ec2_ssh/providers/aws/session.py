"""boto3 session construction from profile and region settings."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import boto3

from aws_ec2_ssh.providers.aws.errors import handle_aws_errors

logger = logging.getLogger(__name__)


def load_aws_session(
    profile: str | None = None,
    region: str | None = None,
    session_factory: Callable[..., Any] | None = None,
) -> Any:
    """Create a boto3 session for the given profile and region.

    Empty values are left to boto3's own resolution chain (environment,
    shared config, instance metadata).

    Parameters
    ----------
    profile : str | None
        Shared config profile name
    region : str | None
        AWS region name
    session_factory : Callable[..., Any] | None
        Optional factory for creating sessions. If None, uses boto3.Session

    Returns
    -------
    boto3.Session
        Configured session

    Raises
    ------
    ProviderCredentialsError
        If the profile does not exist
    """
    factory = session_factory or boto3.Session
    kwargs: dict[str, str] = {}

    if profile:
        kwargs["profile_name"] = profile

    if region:
        kwargs["region_name"] = region

    logger.debug("Loading AWS config: profile=%s, region=%s", profile, region)

    with handle_aws_errors():
        return factory(**kwargs)
