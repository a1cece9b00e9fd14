"""EC2 instance lookup for aws-ec2-ssh."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from aws_ec2_ssh.providers.aws.errors import handle_aws_errors
from aws_ec2_ssh.providers.aws.session import load_aws_session
from aws_ec2_ssh.providers.aws.utils import extract_instance_ids, is_instance_id
from aws_ec2_ssh.providers.exceptions import (
    AmbiguousInstanceError,
    InstanceNotFoundError,
)

logger = logging.getLogger(__name__)

RUNNING_STATE = "running"


class EC2Manager:
    """Look up running EC2 instances by Name tag.

    Parameters
    ----------
    session : boto3.Session
        Session used to create the EC2 client
    """

    def __init__(self, session: Any) -> None:
        self.session = session

        with handle_aws_errors():
            self.ec2_client = session.client("ec2")

    def find_running_instances_by_name(self, name: str) -> list[str]:
        """Return IDs of running instances whose Name tag equals ``name``.

        The tag filter is an exact, case-sensitive match.

        Parameters
        ----------
        name : str
            Name tag value

        Returns
        -------
        list[str]
            Matching instance IDs in response order
        """
        matches: list[str] = []

        with handle_aws_errors():
            paginator = self.ec2_client.get_paginator("describe_instances")
            page_iterator = paginator.paginate(
                Filters=[
                    {"Name": "instance-state-name", "Values": [RUNNING_STATE]},
                    {"Name": "tag:Name", "Values": [name]},
                ]
            )

            for page in page_iterator:
                matches.extend(extract_instance_ids(page))

        return matches

    def resolve_instance_id(self, name_or_id: str) -> str:
        """Resolve a Name tag to exactly one running instance ID.

        Parameters
        ----------
        name_or_id : str
            Instance ID or Name tag

        Returns
        -------
        str
            The input if it is already an instance ID, else the single match

        Raises
        ------
        InstanceNotFoundError
            If no running instance has the Name tag
        AmbiguousInstanceError
            If several running instances share the Name tag
        """
        if is_instance_id(name_or_id):
            return name_or_id

        matches = self.find_running_instances_by_name(name_or_id)

        if not matches:
            raise InstanceNotFoundError(name_or_id)

        if len(matches) > 1:
            raise AmbiguousInstanceError(name_or_id, matches)

        return matches[0]


def resolve_name_tag_to_instance_id(
    name_or_id: str,
    profile: str | None = None,
    region: str | None = None,
    session_factory: Callable[..., Any] | None = None,
) -> str:
    """Resolve an instance ID or Name tag, creating a session only when needed.

    Parameters
    ----------
    name_or_id : str
        Instance ID or Name tag
    profile : str | None
        AWS profile for the lookup
    region : str | None
        AWS region for the lookup
    session_factory : Callable[..., Any] | None
        Optional factory for creating sessions. If None, uses boto3.Session

    Returns
    -------
    str
        Resolved instance ID
    """
    if is_instance_id(name_or_id):
        return name_or_id

    session = load_aws_session(profile, region, session_factory=session_factory)
    instance_id = EC2Manager(session).resolve_instance_id(name_or_id)

    logger.debug("Resolved name '%s' to instance ID: %s", name_or_id, instance_id)
    return instance_id
