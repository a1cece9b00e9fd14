"""Core aws-ec2-ssh functionality."""

from __future__ import annotations

from aws_ec2_ssh.core.signals import ignore_user_signals

__all__ = ["ignore_user_signals"]
