"""SSM Session Manager port forwarding through session-manager-plugin."""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Callable
from typing import Any

from aws_ec2_ssh.constants import SESSION_MANAGER_PLUGIN, SSM_SSH_DOCUMENT
from aws_ec2_ssh.core.signals import ignore_user_signals
from aws_ec2_ssh.providers.aws.errors import handle_aws_errors
from aws_ec2_ssh.providers.exceptions import ProviderError

logger = logging.getLogger(__name__)


class SessionManagerPluginError(RuntimeError):
    """session-manager-plugin is missing or exited with an error."""


def build_start_session_request(instance_id: str, port: int) -> dict[str, Any]:
    """Build the StartSession request for an SSH port forward.

    Parameters
    ----------
    instance_id : str
        Target instance ID
    port : int
        Remote port the session forwards to

    Returns
    -------
    dict[str, Any]
        Keyword arguments for ``ssm.start_session``
    """
    return {
        "Target": instance_id,
        "DocumentName": SSM_SSH_DOCUMENT,
        "Parameters": {"portNumber": [str(port)]},
    }


def build_plugin_command(
    response: dict[str, Any],
    request: dict[str, Any],
    region: str,
    profile: str | None,
    endpoint_url: str,
) -> list[str]:
    """Build the session-manager-plugin argv the AWS CLI would use.

    Parameters
    ----------
    response : dict[str, Any]
        StartSession response (SessionId, StreamUrl, TokenValue)
    request : dict[str, Any]
        StartSession request parameters
    region : str
        Region the session was started in
    profile : str | None
        Profile name, passed through for the plugin's own logging
    endpoint_url : str
        SSM endpoint URL

    Returns
    -------
    list[str]
        Command line for subprocess
    """
    session_data = {
        key: response[key]
        for key in ("SessionId", "StreamUrl", "TokenValue")
        if key in response
    }

    return [
        SESSION_MANAGER_PLUGIN,
        json.dumps(session_data),
        region,
        "StartSession",
        profile or "",
        json.dumps(request),
        endpoint_url,
    ]


def start_ssh_session(
    session: Any,
    instance_id: str,
    port: int,
    profile: str | None = None,
    runner: Callable[..., subprocess.CompletedProcess] | None = None,
) -> None:
    """Open an SSM port-forwarding session and pump it over stdin/stdout.

    Blocks until the plugin exits. SSH reads and writes the tunnel through
    this process's standard streams.

    Parameters
    ----------
    session : boto3.Session
        Session used to create the SSM client
    instance_id : str
        Target instance ID
    port : int
        Remote SSH port
    profile : str | None
        Profile name, forwarded to the plugin
    runner : Callable[..., subprocess.CompletedProcess] | None
        Optional process runner. If None, uses subprocess.run

    Raises
    ------
    ProviderAPIError
        If StartSession is rejected
    SessionManagerPluginError
        If the plugin is not installed or exits non-zero
    """
    run = runner or subprocess.run
    request = build_start_session_request(instance_id, port)

    logger.debug("Starting SSH session to %s on port %s", instance_id, port)

    with handle_aws_errors():
        ssm_client = session.client("ssm")
        response = ssm_client.start_session(**request)

    command = build_plugin_command(
        response,
        request,
        region=ssm_client.meta.region_name,
        profile=profile,
        endpoint_url=ssm_client.meta.endpoint_url,
    )

    try:
        with ignore_user_signals():
            result = run(command, check=False)
    except FileNotFoundError as e:
        _terminate_session(ssm_client, response.get("SessionId"))
        raise SessionManagerPluginError(
            f"{SESSION_MANAGER_PLUGIN} not found. Install it from "
            "https://docs.aws.amazon.com/systems-manager/latest/userguide/"
            "session-manager-working-with-install-plugin.html"
        ) from e

    if result.returncode != 0:
        raise SessionManagerPluginError(
            f"{SESSION_MANAGER_PLUGIN} exited with status {result.returncode}"
        )


def _terminate_session(ssm_client: Any, session_id: str | None) -> None:
    if not session_id:
        return

    try:
        with handle_aws_errors():
            ssm_client.terminate_session(SessionId=session_id)
    except ProviderError as e:
        logger.debug("Failed to terminate SSM session %s: %s", session_id, e)
