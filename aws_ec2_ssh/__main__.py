#!/usr/bin/env python3
"""aws-ec2-ssh - SSH into EC2 instances through SSM Session Manager."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from typing import Any

from aws_ec2_ssh.cli.parsing import parse_port_parameter, parse_target, parse_verbosity
from aws_ec2_ssh.constants import ProxyStyle
from aws_ec2_ssh.core.config import ConfigLoader
from aws_ec2_ssh.providers.aws.compute import resolve_name_tag_to_instance_id
from aws_ec2_ssh.providers.aws.instance_connect import send_ssh_public_key
from aws_ec2_ssh.providers.aws.session import load_aws_session
from aws_ec2_ssh.providers.aws.ssm import start_ssh_session
from aws_ec2_ssh.providers.aws.utils import is_instance_id
from aws_ec2_ssh.services.keys import read_public_key, resolve_key_pair
from aws_ec2_ssh.services.ssh import (
    build_legacy_proxy_command,
    build_proxy_command,
    build_ssh_args,
    run_ssh,
)

logger = logging.getLogger(__name__)


class AwsEc2Ssh:
    """SSH and ssh-proxy commands.

    Parameters
    ----------
    debug : bool
        Propagate debug logging into the generated proxy command
    session_factory : Callable[..., Any] | None
        Optional factory for boto3 sessions. If None, uses boto3.Session
    runner : Callable[..., subprocess.CompletedProcess] | None
        Optional process runner for ssh and session-manager-plugin.
        If None, uses subprocess.run
    """

    def __init__(
        self,
        debug: bool = False,
        session_factory: Callable[..., Any] | None = None,
        runner: Callable[..., subprocess.CompletedProcess] | None = None,
    ) -> None:
        self._debug = debug
        self._session_factory = session_factory
        self._runner = runner
        self._config_loader = ConfigLoader()

    def _settings(self, **overrides: Any) -> dict[str, Any]:
        config = self._config_loader.load_config()
        return self._config_loader.get_settings(config, **overrides)

    def ssh(
        self,
        target: str,
        profile: str | None = None,
        region: str | None = None,
        key: str | None = None,
        port: int | None = None,
        verbose: int = 0,
    ) -> None:
        """Open an interactive SSH session to [user@]instance-id-or-name.

        Parameters
        ----------
        target : str
            ``[user@]instance-id-or-name``
        profile : str | None
            AWS CLI profile to use (default: AWS_PROFILE)
        region : str | None
            AWS region (default: AWS_REGION, then the profile region)
        key : str | None
            SSH private key path (default: first found in ~/.ssh/)
        port : int | None
            SSH port (default: 22)
        verbose : int
            SSH verbosity level, 1-3, given as ``--verbose N`` or ``-v N``
            (a bare ``--verbose`` is 1). Repeated ``-vvv`` is not accepted.
        """
        self._connect(
            target,
            profile=profile,
            region=region,
            key=key,
            port=port,
            verbose=verbose,
            proxy_style=ProxyStyle.SSH_PROXY,
        )

    def _connect(
        self,
        target: str,
        profile: str | None = None,
        region: str | None = None,
        key: str | None = None,
        port: int | None = None,
        verbose: int = 0,
        proxy_style: ProxyStyle = ProxyStyle.SSH_PROXY,
    ) -> None:
        settings = self._settings(profile=profile, region=region, port=port, key=key)
        verbosity = parse_verbosity(verbose)
        key_pair = resolve_key_pair(settings["key"])

        logger.debug(
            "Parsed flags: profile=%s, region=%s, user=%s, key=%s, sshPort=%d, "
            "debug=%s, instanceArg=%s",
            settings["profile"],
            settings["region"],
            settings["user"],
            key_pair.private_key,
            settings["port"],
            self._debug,
            target,
        )

        ssh_target = parse_target(target, default_user=settings["user"])
        if "@" in target:
            logger.debug(
                "Split username from instance: user=%s, instance=%s",
                ssh_target.user,
                ssh_target.instance,
            )

        instance_id = resolve_name_tag_to_instance_id(
            ssh_target.instance,
            profile=settings["profile"],
            region=settings["region"],
            session_factory=self._session_factory,
        )

        if proxy_style is ProxyStyle.AWS_CLI:
            proxy_command = build_legacy_proxy_command(
                key_pair.public_key,
                profile=settings["profile"],
                region=settings["region"],
            )
        else:
            proxy_command = build_proxy_command(
                key_pair.public_key,
                username=ssh_target.user,
                instance_id=instance_id,
                port=settings["port"],
                profile=settings["profile"],
                region=settings["region"],
                debug=self._debug,
            )

        logger.debug("ProxyCommand: %s", proxy_command)

        args = build_ssh_args(
            private_key=key_pair.private_key,
            proxy_command=proxy_command,
            port=settings["port"],
            username=ssh_target.user,
            instance_id=instance_id,
            verbosity=verbosity,
        )
        run_ssh(args, runner=self._runner)

    def ssh_proxy(
        self,
        username: str | None = None,
        instance_id: str | None = None,
        port: int = 22,
        ssh_key: str | None = None,
        profile: str | None = None,
        region: str | None = None,
    ) -> None:
        """Push the public key and tunnel stdin/stdout to the instance's SSH port.

        Run by ssh as its ProxyCommand; not meant to be called by hand.

        Parameters
        ----------
        username : str | None
            SSH username the key is authorized for
        instance_id : str | None
            EC2 instance ID
        port : int
            SSH port (default: 22)
        ssh_key : str | None
            SSH public key path (default: matching .pub of the first key found in ~/.ssh/)
        profile : str | None
            AWS CLI profile to use (default: AWS_PROFILE)
        region : str | None
            AWS region (default: AWS_REGION, then the profile region)
        """
        if not username:
            raise ValueError("ssh-proxy requires --username")

        if not instance_id or not is_instance_id(str(instance_id)):
            raise ValueError(f"ssh-proxy requires a valid --instance-id, got: {instance_id}")

        username = str(username)
        instance_id = str(instance_id)
        remote_port = parse_port_parameter(port)
        settings = self._settings(profile=profile, region=region)

        if ssh_key:
            public_key_path = str(ssh_key)
        else:
            public_key_path = resolve_key_pair(settings["key"]).public_key

        logger.debug("Reading SSH public key: %s", public_key_path)
        public_key = read_public_key(public_key_path)

        session = load_aws_session(
            settings["profile"], settings["region"], session_factory=self._session_factory
        )

        send_ssh_public_key(session, instance_id, username, public_key)

        logger.debug("Starting SSH session")
        start_ssh_session(
            session,
            instance_id,
            remote_port,
            profile=settings["profile"],
            runner=self._runner,
        )


if __name__ == "__main__":
    from aws_ec2_ssh.cli.main import main

    main()
