"""SSH key discovery and public key loading."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import paramiko

from aws_ec2_ssh.constants import DEFAULT_PRIVATE_KEY_FILES, PUBLIC_KEY_SUFFIX

logger = logging.getLogger(__name__)


class KeyNotFoundError(FileNotFoundError):
    """No usable SSH key file was found."""


@dataclass(frozen=True)
class KeyPair:
    """Private key path and its matching public key path.

    Attributes
    ----------
    private_key : str
        Absolute path to the private key passed to ``ssh -i``
    public_key : str
        Path to the public key pushed with EC2 Instance Connect
    """

    private_key: str
    public_key: str


def expand_tilde(path: str) -> str:
    """Expand a leading ``~/`` against the current user's home directory.

    Paths not starting with ``~/`` are returned unchanged.

    Parameters
    ----------
    path : str
        File path, possibly home-relative

    Returns
    -------
    str
        Expanded path
    """
    if path.startswith("~/"):
        return str(Path.home() / path[2:])

    return path


def find_default_private_key(
    candidates: tuple[str, ...] = DEFAULT_PRIVATE_KEY_FILES,
) -> str:
    """Return the first conventional private key file that exists.

    Parameters
    ----------
    candidates : tuple[str, ...]
        Key paths to probe in order (default: OpenSSH identity files)

    Returns
    -------
    str
        Expanded path of the first existing regular file

    Raises
    ------
    KeyNotFoundError
        If none of the candidates exists
    """
    for candidate in candidates:
        path = expand_tilde(candidate)

        if os.path.isfile(path):
            return path

    tried = ", ".join(os.path.basename(candidate) for candidate in candidates)
    raise KeyNotFoundError(f"SSH private key was not found in ~/.ssh (tried {tried})")


def resolve_key_pair(key: str | None = None) -> KeyPair:
    """Locate the private key and verify its public key exists.

    Parameters
    ----------
    key : str | None
        Explicit private key path, or None to auto-detect

    Returns
    -------
    KeyPair
        Resolved private and public key paths

    Raises
    ------
    KeyNotFoundError
        If no private key is found or the ``.pub`` file is missing
    """
    if key:
        private_key = expand_tilde(key)

        if not os.path.isfile(private_key):
            raise KeyNotFoundError(f"SSH private key file not found: {private_key}")
    else:
        private_key = find_default_private_key()
        logger.debug("Using automatically detected private key: %s", private_key)

    public_key = private_key + PUBLIC_KEY_SUFFIX

    if not os.path.exists(public_key):
        raise KeyNotFoundError(
            f"Could not find matching public key for {private_key} (expected {public_key})"
        )

    return KeyPair(private_key=private_key, public_key=public_key)


def read_public_key(path: str) -> str:
    """Read an OpenSSH public key file.

    Parameters
    ----------
    path : str
        Public key path, possibly home-relative

    Returns
    -------
    str
        Key line without surrounding whitespace

    Raises
    ------
    KeyNotFoundError
        If the file does not exist
    ValueError
        If the file does not contain an OpenSSH public key
    """
    path = expand_tilde(path)

    try:
        with open(path) as f:
            content = f.read().strip()
    except FileNotFoundError as e:
        raise KeyNotFoundError(f"SSH public key file not found: {path}") from e

    try:
        blob = paramiko.PublicBlob.from_string(content)
    except ValueError as e:
        raise ValueError(f"Invalid SSH public key in {path}: {e}") from e

    logger.debug("Loaded %s public key from %s", blob.key_type, path)
    return content
