"""Local services: SSH key discovery and the ssh client launcher."""

from __future__ import annotations

from aws_ec2_ssh.services.keys import KeyNotFoundError, KeyPair, resolve_key_pair
from aws_ec2_ssh.services.ssh import SSHCommandError, build_proxy_command, run_ssh

__all__ = [
    "KeyPair",
    "KeyNotFoundError",
    "resolve_key_pair",
    "SSHCommandError",
    "build_proxy_command",
    "run_ssh",
]
