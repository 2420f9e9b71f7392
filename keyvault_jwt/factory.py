# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Factory for creating remote signing methods and keys."""

import logging

from .azure_client import AzureKeyVaultClient
from .client import RemoteKeyClient
from .config import DriverConfig
from .exceptions import RemoteSignerError
from .key import RemoteKey, parse_key_id
from .method import SigningMethod

logger = logging.getLogger("keyvault_jwt.factory")

DEFAULT_ALGORITHM = "RS256"


def create_remote_signer(
    driver_name: str,
    driver_config: DriverConfig,
    client: RemoteKeyClient | None = None,
) -> tuple[SigningMethod, RemoteKey]:
    """Create a signing method and the remote key it signs with.

    Args:
        driver_name: Type of client to use ("azure_keyvault" or "static")
        driver_config: DriverConfig with key_id, algorithm and optional timeout
        client: Client to use; required for "static", optional for "azure_keyvault"

    Returns:
        Tuple of (SigningMethod, RemoteKey)

    Raises:
        RemoteSignerError: If driver_name is unknown or configuration is invalid

    Examples:
        >>> config = DriverConfig(
        ...     driver_name="azure_keyvault",
        ...     config={
        ...         "key_id": "https://my-vault.vault.azure.net/keys/jwt/0123abcd",
        ...         "algorithm": "ES256",
        ...     },
        ... )
        >>> method, key = create_remote_signer("azure_keyvault", config)
        >>> signature = method.sign_string("header.payload", key)
    """
    driver_name_lower = driver_name.lower()

    key_id = driver_config.key_id
    if not key_id:
        raise RemoteSignerError(
            "Remote signer requires key_id in driver_config. "
            "Provide the full key identifier (e.g., "
            "'https://my-vault.vault.azure.net/keys/<name>/<version>')"
        )
    algorithm = driver_config.algorithm or DEFAULT_ALGORITHM

    logger.info("Creating remote signer: type=%s, algorithm=%s, key_id=%s",
                driver_name_lower, algorithm, key_id)

    # Validate locally before any Azure client is built
    method = SigningMethod(algorithm)
    parse_key_id(key_id)

    if driver_name_lower == "azure_keyvault":
        if client is None:
            client = AzureKeyVaultClient()
    elif driver_name_lower == "static":
        if client is None:
            raise RemoteSignerError("The static driver requires a client instance")
    else:
        raise RemoteSignerError(
            f"Unknown driver_name: {driver_name}. "
            f"Supported: 'azure_keyvault', 'static'"
        )

    request_options = {}
    if driver_config.timeout is not None:
        request_options["timeout"] = driver_config.timeout

    return method, RemoteKey(client, key_id, request_options)
