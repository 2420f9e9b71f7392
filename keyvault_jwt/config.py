# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Driver configuration for remote signers."""

import os
from dataclasses import dataclass, field
from typing import Any, Mapping

ENV_PREFIX = "KEYVAULT_JWT_"

# Keys understood by every driver
DRIVER_KEYS = frozenset({"key_id", "algorithm", "timeout"})


@dataclass
class DriverConfig:
    """Configuration for a remote signer driver.

    Attributes:
        driver_name: Name of the driver (e.g., "azure_keyvault")
        config: Dictionary of driver-specific configuration values
        allowed_keys: Set of configuration keys the driver understands
    """
    driver_name: str
    config: dict[str, Any] = field(default_factory=dict)
    allowed_keys: frozenset[str] = DRIVER_KEYS

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def __getattr__(self, name: str) -> Any:
        """Allow attribute-style access to driver config values.

        Returns the value if present, None if the key is allowed but not
        provided, and raises AttributeError for unknown keys.
        """
        if name in ("driver_name", "config", "allowed_keys"):
            return object.__getattribute__(self, name)

        if name in self.config:
            return self.config[name]

        if name in self.allowed_keys:
            return None

        raise AttributeError(
            f"DriverConfig '{self.driver_name}' has no key '{name}'. "
            f"Allowed keys: {sorted(self.allowed_keys)}"
        )


def load_driver_config(
    driver_name: str,
    environ: Mapping[str, str] | None = None,
) -> DriverConfig:
    """Build a DriverConfig from ``KEYVAULT_JWT_*`` environment variables.

    Recognized variables: ``KEYVAULT_JWT_KEY_ID``, ``KEYVAULT_JWT_ALGORITHM``
    and ``KEYVAULT_JWT_TIMEOUT`` (seconds).

    Args:
        driver_name: Driver the configuration is for
        environ: Environment mapping (defaults to os.environ)

    Returns:
        DriverConfig with the variables that were set

    Raises:
        ValueError: If KEYVAULT_JWT_TIMEOUT is not a number
    """
    environ = environ if environ is not None else os.environ

    config: dict[str, Any] = {}
    for key in DRIVER_KEYS:
        value = environ.get(ENV_PREFIX + key.upper())
        if value is not None and value != "":
            config[key] = value

    if "timeout" in config:
        try:
            config["timeout"] = float(config["timeout"])
        except ValueError as e:
            raise ValueError(
                f"{ENV_PREFIX}TIMEOUT must be a number of seconds, got {config['timeout']!r}"
            ) from e

    return DriverConfig(driver_name=driver_name, config=config)
