"""CLI argument parsing and handling."""

from __future__ import annotations

from aws_ec2_ssh.cli.parsing import (
    SSHTarget,
    parse_port_parameter,
    parse_target,
    parse_verbosity,
)

__all__ = [
    "SSHTarget",
    "parse_target",
    "parse_port_parameter",
    "parse_verbosity",
]
