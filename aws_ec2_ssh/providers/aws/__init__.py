"""AWS provider: EC2 lookup, Instance Connect and Session Manager."""

from __future__ import annotations

from aws_ec2_ssh.providers.aws.compute import EC2Manager, resolve_name_tag_to_instance_id
from aws_ec2_ssh.providers.aws.instance_connect import send_ssh_public_key
from aws_ec2_ssh.providers.aws.session import load_aws_session
from aws_ec2_ssh.providers.aws.ssm import SessionManagerPluginError, start_ssh_session

__all__ = [
    "EC2Manager",
    "resolve_name_tag_to_instance_id",
    "send_ssh_public_key",
    "load_aws_session",
    "start_ssh_session",
    "SessionManagerPluginError",
]
