"""Global constants for aws-ec2-ssh.

This module contains application-wide constants shared by the CLI, the SSH
launcher and the proxy subcommand.
"""

from enum import Enum

PROGRAM_NAME = "aws-ec2-ssh"
"""Console script name embedded in generated proxy commands.

SSH re-invokes this program as ``aws-ec2-ssh ssh-proxy ...`` once per
connection attempt, so it must be resolvable on PATH.
"""

DEFAULT_SSH_USERNAME = "ec2-user"
"""OS user used when the target is given without a ``user@`` prefix."""

DEFAULT_SSH_PORT = 22
"""Remote SSH port forwarded through Session Manager."""

MIN_VALID_PORT = 1
MAX_VALID_PORT = 65535

MAX_SSH_VERBOSITY = 3
"""Highest verbosity level understood by the OpenSSH client (``-vvv``)."""

DEFAULT_PRIVATE_KEY_FILES = (
    "~/.ssh/id_rsa",
    "~/.ssh/id_ecdsa",
    "~/.ssh/id_ecdsa_sk",
    "~/.ssh/id_ed25519",
    "~/.ssh/id_ed25519_sk",
)
"""Private key files probed, in order, when no key is given.

Mirrors the identity files OpenSSH itself tries by default.
"""

PUBLIC_KEY_SUFFIX = ".pub"

SSH_BINARY = "ssh"
SESSION_MANAGER_PLUGIN = "session-manager-plugin"

SSM_SSH_DOCUMENT = "AWS-StartSSHSession"
"""SSM document that forwards a session's byte stream to a port on the target."""

INSTANCE_ID_PATTERN = r"^m?i-[0-9a-fA-F]{8,}$"
"""Shape of EC2 (``i-``) and SSM managed (``mi-``) instance IDs."""

DEBUG_ENV_VAR = "AWS_EC2_SSH_DEBUG"
CONFIG_ENV_VAR = "AWS_EC2_SSH_CONFIG"

DEFAULT_CONFIG_PATH = "~/.config/aws-ec2-ssh/config.yaml"
"""Optional YAML file providing defaults for profile, region, user, port and key."""

EXIT_ERROR = 1
"""Exit code for every parse or execution failure."""


class ProxyStyle(str, Enum):
    """How the generated ProxyCommand reaches the instance."""

    SSH_PROXY = "ssh-proxy"
    AWS_CLI = "aws-cli"
