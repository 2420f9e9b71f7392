# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Azure Key Vault implementation of the remote key client."""

import logging
from typing import Any

from .client import RemoteKeyClient, SignRequest, SignResponse, VerifyRequest, VerifyResponse
from .encoding import b64url_decode, b64url_encode
from .exceptions import RemoteSignerError

logger = logging.getLogger("keyvault_jwt.azure_client")


class AzureKeyVaultClient(RemoteKeyClient):
    """Remote key client using Azure Key Vault cryptographic operations.

    Authentication is delegated to ``DefaultAzureCredential`` unless a
    credential is passed in. One ``CryptographyClient`` is kept per key
    identifier; Azure SDK errors are raised unchanged so callers can apply
    their own retry policy.

    Example:
        >>> with AzureKeyVaultClient() as client:
        ...     key = RemoteKey(client, "https://my-vault.vault.azure.net/keys/jwt/0123abcd")
        ...     signature = key.sign("RS256", b"header.payload")
    """

    def __init__(self, credential: Any = None):
        """Initialize the Azure Key Vault client.

        Args:
            credential: Azure token credential (defaults to DefaultAzureCredential)

        Raises:
            RemoteSignerError: If Azure SDK dependencies are not installed
        """
        try:
            from azure.identity import DefaultAzureCredential
            from azure.keyvault.keys.crypto import CryptographyClient, SignatureAlgorithm
        except ImportError as e:
            raise RemoteSignerError(
                "Azure SDK dependencies for Key Vault are not installed. "
                "Install with: pip install keyvault-jwt[azure]"
            ) from e

        self._cryptography_client_cls = CryptographyClient
        self._signature_algorithm = SignatureAlgorithm
        self._owns_credential = credential is None
        self._credential = credential if credential is not None else DefaultAzureCredential()
        self._crypto_clients: dict[str, Any] = {}

    def _crypto_client(self, vault_url: str, key_name: str, key_version: str) -> Any:
        key_id = f"{vault_url}/keys/{key_name}/{key_version}"
        client = self._crypto_clients.get(key_id)
        if client is None:
            client = self._cryptography_client_cls(key=key_id, credential=self._credential)
            client = self._crypto_clients.setdefault(key_id, client)
            logger.info("Initialized Key Vault cryptography client for %s", key_id)
        return client

    def sign(
        self,
        vault_url: str,
        key_name: str,
        key_version: str,
        request: SignRequest,
        **kwargs: Any,
    ) -> SignResponse:
        crypto_client = self._crypto_client(vault_url, key_name, key_version)
        result = crypto_client.sign(
            self._signature_algorithm(request.algorithm),
            b64url_decode(request.value),
            **kwargs,
        )
        signature = result.signature
        return SignResponse(
            kid=result.key_id,
            result=b64url_encode(signature) if signature is not None else None,
        )

    def verify(
        self,
        vault_url: str,
        key_name: str,
        key_version: str,
        request: VerifyRequest,
        **kwargs: Any,
    ) -> VerifyResponse:
        crypto_client = self._crypto_client(vault_url, key_name, key_version)
        result = crypto_client.verify(
            self._signature_algorithm(request.algorithm),
            b64url_decode(request.digest),
            b64url_decode(request.signature),
            **kwargs,
        )
        return VerifyResponse(value=result.is_valid)

    def close(self) -> None:
        """Release the cryptography clients and any credential created here."""
        clients = list(self._crypto_clients.values())
        self._crypto_clients.clear()
        for client in clients:
            close_method = getattr(client, "close", None)
            if callable(close_method):
                close_method()

        if self._owns_credential:
            close_method = getattr(self._credential, "close", None)
            if callable(close_method):
                close_method()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
