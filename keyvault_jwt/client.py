# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Remote key client interface and wire models.

The models mirror the Key Vault REST payloads: binary values travel as
unpadded base64url strings and every response field may be missing.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SignRequest:
    """Parameters for a remote sign operation.

    Attributes:
        algorithm: Signature algorithm name (e.g., "RS256")
        value: base64url-encoded digest
    """
    algorithm: str
    value: str


@dataclass(frozen=True)
class SignResponse:
    """Result of a remote sign operation.

    Attributes:
        kid: Full identifier of the key that produced the signature
        result: base64url-encoded signature
    """
    kid: str | None = None
    result: str | None = None


@dataclass(frozen=True)
class VerifyRequest:
    """Parameters for a remote verify operation."""
    algorithm: str
    digest: str
    signature: str


@dataclass(frozen=True)
class VerifyResponse:
    """Result of a remote verify operation."""
    value: bool | None = None


class RemoteKeyClient(ABC):
    """Abstract base class for clients that perform remote key operations.

    Implementations own transport, authentication and retry policy. Errors
    they raise reach the caller unchanged.
    """

    @abstractmethod
    def sign(
        self,
        vault_url: str,
        key_name: str,
        key_version: str,
        request: SignRequest,
        **kwargs: Any,
    ) -> SignResponse:
        """Sign a digest with a remote key.

        Args:
            vault_url: Base URL of the vault (scheme and host)
            key_name: Name of the key in the vault
            key_version: Version of the key
            request: Algorithm and encoded digest
            **kwargs: Per-call request options (e.g., timeout)

        Returns:
            SignResponse as reported by the service
        """
        pass

    @abstractmethod
    def verify(
        self,
        vault_url: str,
        key_name: str,
        key_version: str,
        request: VerifyRequest,
        **kwargs: Any,
    ) -> VerifyResponse:
        """Verify a digest signature with a remote key.

        Args:
            vault_url: Base URL of the vault (scheme and host)
            key_name: Name of the key in the vault
            key_version: Version of the key
            request: Algorithm, encoded digest and encoded signature
            **kwargs: Per-call request options (e.g., timeout)

        Returns:
            VerifyResponse as reported by the service
        """
        pass
