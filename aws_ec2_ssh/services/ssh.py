"""ProxyCommand construction and ssh client invocation."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable

from aws_ec2_ssh.constants import PROGRAM_NAME, SSH_BINARY, SSM_SSH_DOCUMENT
from aws_ec2_ssh.core.signals import ignore_user_signals

logger = logging.getLogger(__name__)


class SSHCommandError(RuntimeError):
    """The ssh client could not be started or exited with an error."""


def prepare_arg(name: str, value: str | None) -> list[str]:
    """Return ``["--name", value]`` when value is set, else nothing."""
    if not value:
        return []

    return [f"--{name}", value]


def build_proxy_command(
    public_key: str,
    username: str,
    instance_id: str,
    port: int,
    profile: str | None = None,
    region: str | None = None,
    debug: bool = False,
    program: str = PROGRAM_NAME,
) -> str:
    """Build a ProxyCommand that re-invokes this tool's ssh-proxy command.

    Parameters
    ----------
    public_key : str
        Public key path pushed through EC2 Instance Connect
    username : str
        OS user the key is authorized for
    instance_id : str
        Resolved instance ID
    port : int
        Remote SSH port forwarded by Session Manager
    profile : str | None
        AWS profile, omitted from the command when empty
    region : str | None
        AWS region, omitted from the command when empty
    debug : bool
        Propagate debug logging to the proxy process
    program : str
        Executable name (default: aws-ec2-ssh)

    Returns
    -------
    str
        Shell command line
    """
    args = [
        program,
        "ssh-proxy",
        "--ssh-key",
        public_key,
        "--username",
        username,
        "--instance-id",
        instance_id,
        "--port",
        str(port),
        *prepare_arg("profile", profile),
        *prepare_arg("region", region),
    ]

    if debug:
        args.append("--debug")

    return shlex.join(args)


def build_legacy_proxy_command(
    public_key: str,
    profile: str | None = None,
    region: str | None = None,
) -> str:
    """Build a ProxyCommand that drives the ``aws`` CLI directly.

    SSH expands ``%h`` (instance ID), ``%r`` (remote user) and ``%p`` (port)
    before running the command.

    Parameters
    ----------
    public_key : str
        Public key path pushed through EC2 Instance Connect
    profile : str | None
        AWS profile, omitted from the command when empty
    region : str | None
        AWS region, omitted from the command when empty

    Returns
    -------
    str
        Shell command line
    """
    aws_args = shlex.join(prepare_arg("profile", profile) + prepare_arg("region", region))
    aws_suffix = f" {aws_args}" if aws_args else ""

    send_key = (
        "aws ec2-instance-connect send-ssh-public-key --instance-id %h "
        f"--instance-os-user %r --ssh-public-key {shlex.quote('file://' + public_key)}"
        f"{aws_suffix} > /dev/null"
    )
    start_session = (
        f"aws ssm start-session --target %h --document-name {SSM_SSH_DOCUMENT} "
        f"--parameters portNumber=%p{aws_suffix}"
    )

    return f"{send_key} && {start_session}"


def build_ssh_args(
    private_key: str,
    proxy_command: str,
    port: int,
    username: str,
    instance_id: str,
    verbosity: int = 0,
) -> list[str]:
    """Build the ssh client argv.

    Parameters
    ----------
    private_key : str
        Identity file passed with ``-i``
    proxy_command : str
        Command SSH runs to obtain the connection stream
    port : int
        SSH port
    username : str
        Remote user
    instance_id : str
        Instance ID used as the SSH host name
    verbosity : int
        Number of ``v`` characters in a single ``-v`` flag

    Returns
    -------
    list[str]
        Arguments, starting with the ssh binary
    """
    args = [
        SSH_BINARY,
        "-i",
        private_key,
        "-o",
        f"ProxyCommand=sh -c {shlex.quote(proxy_command)}",
        "-p",
        str(port),
    ]

    if verbosity > 0:
        args.append("-" + "v" * verbosity)

    args.append(f"{username}@{instance_id}")
    return args


def run_ssh(
    args: list[str],
    runner: Callable[..., subprocess.CompletedProcess] | None = None,
) -> None:
    """Run ssh in the foreground with inherited standard streams.

    Parameters
    ----------
    args : list[str]
        Full ssh argv
    runner : Callable[..., subprocess.CompletedProcess] | None
        Optional process runner. If None, uses subprocess.run

    Raises
    ------
    SSHCommandError
        If ssh is not installed or exits non-zero
    """
    run = runner or subprocess.run

    logger.debug("SSH command: %s", shlex.join(args))

    try:
        with ignore_user_signals():
            result = run(args, check=False)
    except FileNotFoundError as e:
        raise SSHCommandError(f"ssh failed: {args[0]} not found on PATH") from e

    if result.returncode != 0:
        raise SSHCommandError(f"ssh failed: exit status {result.returncode}")
