# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Remote Key Vault key handle.

A :class:`RemoteKey` references a key that never leaves the vault. Digests
are computed locally and only the digest is sent to the service; every
response is checked before a signature is handed back.
"""

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from .algorithms import SignatureAlgorithm, algorithm_name, compute_digest, digest_algorithm_for
from .client import RemoteKeyClient, SignRequest, VerifyRequest
from .encoding import b64url_decode, b64url_encode
from .exceptions import (
    InvalidDigestError,
    InvalidKeyIdentifierError,
    InvalidServerResponseError,
    ResponseKeyMismatchError,
    VerificationError,
)

logger = logging.getLogger("keyvault_jwt.key")


@dataclass(frozen=True)
class KeyLocator:
    """Parsed Key Vault key identifier.

    Attributes:
        vault_url: Scheme and host of the vault (e.g., "https://my-vault.vault.azure.net")
        name: Name of the key
        version: Version of the key
    """
    vault_url: str
    name: str
    version: str


def parse_key_id(key_id: str) -> KeyLocator:
    """Parse a key identifier of the form ``<scheme>://<host>/keys/<name>/<version>``.

    Args:
        key_id: Full key identifier URL

    Returns:
        KeyLocator for the key

    Raises:
        InvalidKeyIdentifierError: If the identifier has any other shape
    """
    try:
        parts = urlsplit(key_id)
        # Raises ValueError for a non-numeric or out-of-range port
        parts.port
    except (TypeError, ValueError) as e:
        raise InvalidKeyIdentifierError(f"Invalid key identifier {key_id!r}: {e}") from e

    host = parts.netloc.rpartition("@")[2]
    if not parts.scheme or not host:
        raise InvalidKeyIdentifierError(
            f"Invalid key identifier {key_id!r}: scheme and host are required"
        )

    segments = parts.path.removeprefix("/").split("/")
    if len(segments) != 3 or segments[0] != "keys" or not all(segments):
        raise InvalidKeyIdentifierError(
            f"Invalid key identifier {key_id!r}: expected path /keys/<name>/<version>"
        )

    return KeyLocator(
        vault_url=f"{parts.scheme}://{host}",
        name=segments[1],
        version=segments[2],
    )


class RemoteKey:
    """Reference to a key held in a remote vault.

    The handle owns no key material and keeps no per-call state, so a single
    instance can be shared across threads as long as the client allows it.

    Attributes:
        client: RemoteKeyClient performing the sign/verify calls
        request_options: Keyword arguments passed to every client call,
            e.g. ``{"timeout": 10}`` to bound how long a call may wait

    Example:
        >>> key = RemoteKey(client, "https://my-vault.vault.azure.net/keys/jwt/0123abcd")
        >>> signature = key.sign(SignatureAlgorithm.RS256, b"header.payload")
    """

    def __init__(
        self,
        client: RemoteKeyClient,
        key_id: str,
        request_options: dict[str, Any] | None = None,
    ):
        """Initialize a remote key handle.

        Args:
            client: Client used to reach the key service
            key_id: Full key identifier (``<scheme>://<host>/keys/<name>/<version>``)
            request_options: Optional per-call options forwarded to the client

        Raises:
            InvalidKeyIdentifierError: If key_id is malformed
        """
        self._locator = parse_key_id(key_id)
        self._key_id = key_id
        self.client = client
        self.request_options = dict(request_options or {})

    @classmethod
    def from_key_id(
        cls,
        client: RemoteKeyClient,
        key_id: str,
        **request_options: Any,
    ) -> "RemoteKey":
        """Create a remote key handle with keyword request options."""
        return cls(client, key_id, request_options)

    @property
    def key_id(self) -> str:
        return self._key_id

    @property
    def locator(self) -> KeyLocator:
        return self._locator

    @property
    def vault_url(self) -> str:
        return self._locator.vault_url

    @property
    def name(self) -> str:
        return self._locator.name

    @property
    def version(self) -> str:
        return self._locator.version

    def __repr__(self) -> str:
        return f"RemoteKey({self._key_id!r})"

    def sign(self, algorithm: SignatureAlgorithm | str, message: bytes) -> bytes:
        """Sign a message with the remote key.

        Args:
            algorithm: Signature algorithm
            message: Raw message bytes; only their digest is sent

        Returns:
            Raw signature bytes

        Raises:
            UnsupportedAlgorithmError: If the algorithm is not supported
            ResponseKeyMismatchError: If the service signed with another key
            InvalidServerResponseError: If the response is incomplete
        """
        digest = compute_digest(algorithm, message)
        return self.sign_digest(algorithm, digest)

    def sign_digest(self, algorithm: SignatureAlgorithm | str, digest: bytes) -> bytes:
        """Sign a precomputed digest with the remote key.

        Args:
            algorithm: Signature algorithm
            digest: Digest produced by the algorithm's hash function

        Returns:
            Raw signature bytes

        Raises:
            UnsupportedAlgorithmError: If the algorithm is not supported
            InvalidDigestError: If the digest length does not match the hash
            ResponseKeyMismatchError: If the service signed with another key
            InvalidServerResponseError: If the response is incomplete
        """
        name = algorithm_name(algorithm)
        self._check_digest(name, digest)

        logger.debug("Signing digest with %s using %s", self._key_id, name)
        response = self.client.sign(
            self.vault_url,
            self.name,
            self.version,
            SignRequest(algorithm=name, value=b64url_encode(digest)),
            **self.request_options,
        )

        if response.kid is None or response.kid != self._key_id:
            logger.warning(
                "Sign response key id %r does not match requested key %r",
                response.kid,
                self._key_id,
            )
            raise ResponseKeyMismatchError(
                f"Response key id {response.kid!r} does not match {self._key_id!r}"
            )
        if response.result is None:
            raise InvalidServerResponseError("Sign response is missing the signature")

        try:
            return b64url_decode(response.result)
        except ValueError as e:
            raise InvalidServerResponseError(f"Sign response signature is malformed: {e}") from e

    def verify(self, algorithm: SignatureAlgorithm | str, message: bytes, signature: bytes) -> None:
        """Verify a message signature with the remote key.

        Raises:
            VerificationError: If the service reports the signature invalid
            InvalidServerResponseError: If the response is incomplete
        """
        digest = compute_digest(algorithm, message)
        self.verify_digest(algorithm, digest, signature)

    def verify_digest(
        self,
        algorithm: SignatureAlgorithm | str,
        digest: bytes,
        signature: bytes,
    ) -> None:
        """Verify a digest signature with the remote key.

        Args:
            algorithm: Signature algorithm
            digest: Digest produced by the algorithm's hash function
            signature: Raw signature bytes

        Raises:
            UnsupportedAlgorithmError: If the algorithm is not supported
            InvalidDigestError: If the digest length does not match the hash
            VerificationError: If the service reports the signature invalid
            InvalidServerResponseError: If the response is incomplete
        """
        name = algorithm_name(algorithm)
        self._check_digest(name, digest)

        logger.debug("Verifying digest with %s using %s", self._key_id, name)
        response = self.client.verify(
            self.vault_url,
            self.name,
            self.version,
            VerifyRequest(
                algorithm=name,
                digest=b64url_encode(digest),
                signature=b64url_encode(signature),
            ),
            **self.request_options,
        )

        if response.value is None:
            raise InvalidServerResponseError("Verify response is missing the result")
        if not isinstance(response.value, bool):
            raise InvalidServerResponseError(
                f"Verify response result is not a boolean: {response.value!r}"
            )
        if response.value is not True:
            raise VerificationError(f"Signature verification failed for {self._key_id}")

    @staticmethod
    def _check_digest(algorithm: str, digest: bytes) -> None:
        expected = digest_algorithm_for(algorithm).digest_size
        if len(digest) != expected:
            raise InvalidDigestError(
                f"{algorithm} expects a {expected}-byte digest, got {len(digest)} bytes"
            )
