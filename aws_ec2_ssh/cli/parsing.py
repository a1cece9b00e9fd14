"""CLI argument parsing and parameter conversion utilities."""

from __future__ import annotations

from dataclasses import dataclass

from aws_ec2_ssh.constants import (
    DEFAULT_SSH_USERNAME,
    MAX_SSH_VERBOSITY,
    MAX_VALID_PORT,
    MIN_VALID_PORT,
)


@dataclass(frozen=True)
class SSHTarget:
    """Connection target parsed from ``[user@]instance``.

    Attributes
    ----------
    user : str
        OS user to log in as
    instance : str
        Instance ID or Name tag
    """

    user: str
    instance: str


def parse_target(target: str, default_user: str = DEFAULT_SSH_USERNAME) -> SSHTarget:
    """Split ``[user@]instance`` on the first ``@``.

    Parameters
    ----------
    target : str
        Positional target argument
    default_user : str
        User when no ``user@`` prefix is present (default: ec2-user)

    Returns
    -------
    SSHTarget
        Parsed user and instance

    Raises
    ------
    ValueError
        If the target is not text, or the user or instance part is empty
    """
    if not isinstance(target, str):
        raise ValueError(
            f"Invalid target {target!r}: it was read as a {type(target).__name__}, "
            "not as text. Quote it, e.g. '\"1e3\"'"
        )

    target = target.strip()

    if "@" in target:
        user, instance = target.split("@", 1)
    else:
        user, instance = default_user, target

    if not user:
        raise ValueError(f"Invalid target '{target}': user name is empty")

    if not instance:
        raise ValueError(f"Invalid target '{target}': instance is empty")

    return SSHTarget(user=user, instance=instance)


def parse_port_parameter(port: int | str) -> int:
    """Parse a port flag into a validated integer.

    Parameters
    ----------
    port : int | str
        Port value from the command line or config file

    Returns
    -------
    int
        Port number

    Raises
    ------
    ValueError
        If the value is not numeric or outside 1-65535
    """
    if isinstance(port, bool):
        raise ValueError(f"Invalid port value: {port!r} is not numeric")

    try:
        value = int(port)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid port value: '{port}' is not numeric") from None

    if value < MIN_VALID_PORT or value > MAX_VALID_PORT:
        raise ValueError(
            f"Invalid port value: {value}. Port must be between "
            f"{MIN_VALID_PORT} and {MAX_VALID_PORT}"
        )

    return value


def parse_verbosity(verbose: int | bool | None) -> int:
    """Normalize the verbosity flag to an SSH ``-v`` count.

    A bare ``--verbose`` arrives as True and counts as one level.

    Parameters
    ----------
    verbose : int | bool | None
        Verbosity from the command line

    Returns
    -------
    int
        Level between 0 and 3

    Raises
    ------
    ValueError
        If the value is negative or not an integer
    """
    if verbose is None or verbose is False:
        return 0

    if verbose is True:
        return 1

    try:
        level = int(verbose)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid verbosity: '{verbose}' is not numeric") from None

    if level < 0:
        raise ValueError(f"Invalid verbosity: {level}. Must be 0 or greater")

    return min(level, MAX_SSH_VERBOSITY)


__all__ = [
    "SSHTarget",
    "parse_target",
    "parse_port_parameter",
    "parse_verbosity",
]
