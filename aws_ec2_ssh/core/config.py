import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import InterpolationResolutionError, MissingMandatoryValue

from aws_ec2_ssh.cli.parsing import parse_port_parameter
from aws_ec2_ssh.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    DEFAULT_SSH_PORT,
    DEFAULT_SSH_USERNAME,
)
from aws_ec2_ssh.services.keys import expand_tilde

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load connection defaults from YAML and merge them with flags and environment."""

    def __init__(self) -> None:
        """Initialize ConfigLoader with built-in defaults."""
        self.BUILT_IN_DEFAULTS: dict[str, Any] = {
            "profile": None,
            "region": None,
            "user": DEFAULT_SSH_USERNAME,
            "port": DEFAULT_SSH_PORT,
            "key": None,
        }

    def load_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load configuration from YAML file.

        Parameters
        ----------
        config_path : str | None
            Path to YAML config file. If None, checks AWS_EC2_SSH_CONFIG env
            var, then falls back to ~/.config/aws-ec2-ssh/config.yaml

        Returns
        -------
        dict[str, Any]
            Parsed configuration with a defaults section, with all variable
            interpolations resolved

        Raises
        ------
        ValueError
            If the file is not valid YAML or variables cannot be resolved
        RuntimeError
            If the file exists but cannot be read
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)

        config_file = Path(expand_tilde(config_path))

        if not config_file.exists():
            return {"defaults": {}}

        try:
            cfg = OmegaConf.load(config_file)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML config file %s: %s", config_file, e)
            raise ValueError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            logger.error("Failed to read config file %s: %s", config_file, e)
            raise RuntimeError(f"Failed to read config file {config_file}: {e}") from e

        if cfg is None:
            return {"defaults": {}}

        try:
            config = OmegaConf.to_container(cfg, resolve=True, throw_on_missing=True)
        except (InterpolationResolutionError, MissingMandatoryValue) as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise ValueError(f"Configuration variable resolution error: {e}") from e

        if not isinstance(config, dict):
            raise ValueError(f"Invalid config file {config_file}: expected a mapping")

        config.setdefault("defaults", {})
        return config

    def get_settings(
        self,
        config: dict[str, Any],
        profile: str | None = None,
        region: str | None = None,
        user: str | None = None,
        port: int | str | None = None,
        key: str | None = None,
    ) -> dict[str, Any]:
        """Merge built-in defaults, YAML defaults, environment and CLI flags.

        Later sources win: built-in < YAML < environment < CLI flag. The
        environment only supplies profile (AWS_PROFILE) and region
        (AWS_REGION, then AWS_DEFAULT_REGION).

        Parameters
        ----------
        config : dict[str, Any]
            Configuration loaded by load_config
        profile, region, user, port, key
            CLI flag values; None means not given

        Returns
        -------
        dict[str, Any]
            Merged settings with keys profile, region, user, port, key

        Raises
        ------
        ValueError
            If the configuration is invalid
        """
        merged = copy.deepcopy(self.BUILT_IN_DEFAULTS)

        yaml_defaults = config.get("defaults") or {}
        self.validate_defaults(yaml_defaults)
        for key_name, value in yaml_defaults.items():
            if value is not None:
                merged[key_name] = value

        env_profile = os.environ.get("AWS_PROFILE")
        env_region = os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION")
        if env_profile:
            merged["profile"] = env_profile
        if env_region:
            merged["region"] = env_region

        overrides = {
            "profile": profile,
            "region": region,
            "user": user,
            "port": port,
            "key": key,
        }
        for key_name, value in overrides.items():
            if value is None or value == "":
                continue

            # Fire hands over numeric-looking values (account-ID profiles) as int
            merged[key_name] = value if key_name == "port" else str(value)

        merged["port"] = parse_port_parameter(merged["port"])
        return merged

    def validate_defaults(self, defaults: dict[str, Any]) -> None:
        """Validate the YAML defaults section.

        Parameters
        ----------
        defaults : dict[str, Any]
            The ``defaults`` mapping

        Raises
        ------
        ValueError
            If the section is not a mapping, has unknown keys, or bad types
        """
        if not isinstance(defaults, dict):
            raise ValueError("defaults must be a mapping")

        unknown = sorted(set(defaults) - set(self.BUILT_IN_DEFAULTS))
        if unknown:
            raise ValueError(
                f"Unknown configuration keys: {unknown}. "
                f"Valid keys: {sorted(self.BUILT_IN_DEFAULTS)}"
            )

        for field in ("profile", "region", "user", "key"):
            value = defaults.get(field)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{field} must be a string")

        if defaults.get("port") is not None:
            parse_port_parameter(defaults["port"])
