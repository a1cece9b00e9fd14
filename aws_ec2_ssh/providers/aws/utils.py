"""AWS-specific utility functions for aws-ec2-ssh."""

from __future__ import annotations

import re
from typing import Any

from aws_ec2_ssh.constants import INSTANCE_ID_PATTERN

_INSTANCE_ID_RE = re.compile(INSTANCE_ID_PATTERN)


def is_instance_id(value: str) -> bool:
    """Check whether a string is shaped like an EC2 or SSM managed instance ID.

    Parameters
    ----------
    value : str
        Candidate instance identifier

    Returns
    -------
    bool
        True for ``i-`` or ``mi-`` followed by at least eight hex digits
    """
    return _INSTANCE_ID_RE.match(value) is not None


def extract_instance_ids(response: dict[str, Any]) -> list[str]:
    """Collect instance IDs from a describe_instances response.

    Parameters
    ----------
    response : dict[str, Any]
        Response (or page) from boto3 describe_instances

    Returns
    -------
    list[str]
        Instance IDs in reservation order
    """
    return [
        instance["InstanceId"]
        for reservation in response.get("Reservations", [])
        for instance in reservation.get("Instances", [])
    ]
