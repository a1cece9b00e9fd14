"""EC2 Instance Connect public key push."""

from __future__ import annotations

import logging
from typing import Any

from aws_ec2_ssh.providers.aws.errors import handle_aws_errors
from aws_ec2_ssh.providers.exceptions import ProviderAPIError

logger = logging.getLogger(__name__)


def send_ssh_public_key(
    session: Any, instance_id: str, username: str, public_key: str
) -> dict[str, Any]:
    """Authorize a public key for an instance OS user.

    The key stays valid on the instance for a short window (60 seconds),
    long enough for the SSH handshake that follows.

    Parameters
    ----------
    session : boto3.Session
        Session used to create the ec2-instance-connect client
    instance_id : str
        Target instance ID
    username : str
        OS user the key is authorized for
    public_key : str
        OpenSSH public key line

    Returns
    -------
    dict[str, Any]
        SendSSHPublicKey response

    Raises
    ------
    ProviderAPIError
        If the call is rejected or reports ``Success: false``
    """
    logger.debug(
        "Sending SSH public key for username: %s instance ID: %s", username, instance_id
    )

    with handle_aws_errors():
        client = session.client("ec2-instance-connect")
        response = client.send_ssh_public_key(
            InstanceId=instance_id,
            InstanceOSUser=username,
            SSHPublicKey=public_key,
        )

    if not response.get("Success", False):
        raise ProviderAPIError(
            f"EC2 Instance Connect did not accept the key for {instance_id} "
            f"(request {response.get('RequestId', 'unknown')})",
            operation_name="SendSSHPublicKey",
        )

    return response
