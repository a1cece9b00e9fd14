"""CLI entry point for aws-ec2-ssh."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import fire
from fire.core import FireExit

from aws_ec2_ssh.__main__ import AwsEc2Ssh
from aws_ec2_ssh.constants import DEBUG_ENV_VAR, EXIT_ERROR, ProxyStyle
from aws_ec2_ssh.logging import configure_logging
from aws_ec2_ssh.providers import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
)
from aws_ec2_ssh.providers.aws.errors import describe_api_error, describe_credentials_error

logger = logging.getLogger(__name__)


def is_debug_mode() -> bool:
    """Return True when AWS_EC2_SSH_DEBUG=1 asks for raw tracebacks."""
    return os.environ.get(DEBUG_ENV_VAR) == "1"


def log_and_exit(lines: list[str]) -> None:
    """Log each line as an error and exit with status 1.

    Parameters
    ----------
    lines : list[str]
        Messages to log, in order
    """
    for line in lines:
        logger.error(line)

    sys.exit(EXIT_ERROR)


def handle_credentials_error(error: ProviderCredentialsError, profile: str | None) -> None:
    """Handle provider credentials error.

    Parameters
    ----------
    error : ProviderCredentialsError
        The credentials error that was raised
    profile : str | None
        Profile in use
    """
    log_and_exit(describe_credentials_error(error, profile))


def handle_api_error(error: ProviderAPIError, profile: str | None) -> None:
    """Handle provider API error with context-specific messages.

    Parameters
    ----------
    error : ProviderAPIError
        The API error that was raised
    profile : str | None
        Profile in use
    """
    log_and_exit(describe_api_error(error, profile))


@contextmanager
def handle_cli_errors(profile: str | None = None) -> Iterator[None]:
    """Turn any failure inside the block into a logged message and exit 1.

    With AWS_EC2_SSH_DEBUG=1 the original exception propagates instead.

    Parameters
    ----------
    profile : str | None
        Profile given on the command line, used in suggested fixes
    """
    profile = profile or os.environ.get("AWS_PROFILE")

    try:
        yield
    except (
        ProviderCredentialsError,
        ProviderAPIError,
        ProviderConnectionError,
        OSError,
        ValueError,
        RuntimeError,
    ) as e:
        if is_debug_mode():
            raise

        if isinstance(e, ProviderCredentialsError):
            handle_credentials_error(e, profile)
        elif isinstance(e, ProviderAPIError):
            handle_api_error(e, profile)
        elif isinstance(e, ProviderConnectionError):
            log_and_exit([f"Could not reach AWS: {e}"])
        else:
            log_and_exit([str(e)])


class AwsEc2SshCLI(AwsEc2Ssh):
    """CLI wrapper that handles process exit codes.

    Fire maps the constructor to the global ``--debug`` flag and the ``ssh``
    and ``ssh_proxy`` methods to subcommands.

    Parameters
    ----------
    debug : bool
        Enable debug logging
    """

    def __init__(self, debug: bool = False) -> None:
        debug = bool(debug) or is_debug_mode()
        configure_logging(debug)
        super().__init__(debug=debug)

    def ssh(
        self,
        target: str,
        profile: str | None = None,
        region: str | None = None,
        key: str | None = None,
        port: int | None = None,
        verbose: int = 0,
    ) -> None:
        """Open an interactive SSH session to [user@]instance-id-or-name.

        Parameters
        ----------
        target : str
            ``[user@]instance-id-or-name``
        profile : str | None
            AWS CLI profile to use (default: AWS_PROFILE)
        region : str | None
            AWS region (default: AWS_REGION, then the profile region)
        key : str | None
            SSH private key path (default: first found in ~/.ssh/)
        port : int | None
            SSH port (default: 22)
        verbose : int
            SSH verbosity level, 1-3, given as ``--verbose N`` or ``-v N``
            (a bare ``--verbose`` is 1). Repeated ``-vvv`` is not accepted.
            Profile and port have no short flags; use ``--profile`` and
            ``--port``.
        """
        with handle_cli_errors(profile):
            super().ssh(
                target,
                profile=profile,
                region=region,
                key=key,
                port=port,
                verbose=verbose,
            )

    def ssh_proxy(
        self,
        username: str | None = None,
        instance_id: str | None = None,
        port: int = 22,
        ssh_key: str | None = None,
        profile: str | None = None,
        region: str | None = None,
    ) -> None:
        """Push the public key and tunnel stdin/stdout to the instance.

        Parameters
        ----------
        username : str | None
            SSH username
        instance_id : str | None
            EC2 instance ID
        port : int
            SSH port (default: 22)
        ssh_key : str | None
            SSH public key path
        profile : str | None
            AWS CLI profile to use (default: AWS_PROFILE)
        region : str | None
            AWS region (default: AWS_REGION, then the profile region)
        """
        with handle_cli_errors(profile):
            super().ssh_proxy(
                username=username,
                instance_id=instance_id,
                port=port,
                ssh_key=ssh_key,
                profile=profile,
                region=region,
            )


def legacy_ssh(
    target: str,
    profile: str | None = None,
    region: str | None = None,
    key: str | None = None,
    port: int | None = None,
    verbose: int = 0,
    debug: bool = False,
) -> None:
    """Open an SSH session whose ProxyCommand calls the aws CLI directly.

    Parameters
    ----------
    target : str
        ``[user@]instance-id-or-name``
    profile : str | None
        AWS CLI profile to use (default: AWS_PROFILE)
    region : str | None
        AWS region (default: AWS_REGION, then the profile region)
    key : str | None
        SSH private key path (default: first found in ~/.ssh/)
    port : int | None
        SSH port (default: 22)
    verbose : int
        SSH verbosity level, 1-3, given as ``--verbose N`` (not ``-vvv``)
    debug : bool
        Enable debug logging
    """
    app = AwsEc2SshCLI(debug=debug)

    with handle_cli_errors(profile):
        app._connect(
            target,
            profile=profile,
            region=region,
            key=key,
            port=port,
            verbose=verbose,
            proxy_style=ProxyStyle.AWS_CLI,
        )


def run_fire(component: Any, name: str) -> None:
    """Run a Fire component, mapping usage errors to exit status 1.

    Parameters
    ----------
    component : Any
        Class or function handed to Fire
    name : str
        Program name shown in help output
    """
    try:
        fire.Fire(component, name=name)
    except KeyboardInterrupt:
        sys.exit(EXIT_ERROR)
    except FireExit as e:
        if e.code:
            sys.exit(EXIT_ERROR)
        raise


def main() -> None:
    """Entry point for the ``aws-ec2-ssh`` command.

    Fire maps the ``ssh`` and ``ssh-proxy`` methods of the CLI class to
    subcommands and ``--debug`` to the constructor.
    """
    run_fire(AwsEc2SshCLI, name="aws-ec2-ssh")


def legacy_main() -> None:
    """Entry point for the single-command ``ec2-ssh`` tool."""
    run_fire(legacy_ssh, name="ec2-ssh")
