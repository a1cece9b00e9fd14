"""Logging setup for aws-ec2-ssh."""

import logging
import sys

from aws_ec2_ssh.logging.formatters import LevelPrefixFormatter

NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "paramiko")


def configure_logging(debug: bool = False) -> None:
    """Route all log output to stderr.

    stdout stays untouched because the ssh-proxy command uses it as the
    SSH transport.

    Parameters
    ----------
    debug : bool
        Log at DEBUG level instead of WARNING
    """
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(LevelPrefixFormatter("%(message)s"))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        handlers=[stderr_handler],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["LevelPrefixFormatter", "configure_logging"]
