# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Signature algorithm to digest algorithm mapping.

Algorithm names follow Azure Key Vault's ``JsonWebKeySignatureAlgorithm``
vocabulary, which is also the JOSE ``alg`` header value.
"""

from enum import Enum
from types import MappingProxyType

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes

from .exceptions import UnsupportedAlgorithmError


class SignatureAlgorithm(str, Enum):
    """Signing algorithms supported by remote Key Vault keys."""

    ES256 = "ES256"
    ES256K = "ES256K"
    ES384 = "ES384"
    ES512 = "ES512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"


_HASH_ALGORITHMS: dict[str, type[hashes.HashAlgorithm]] = {
    SignatureAlgorithm.ES256.value: hashes.SHA256,
    SignatureAlgorithm.ES256K.value: hashes.SHA256,
    SignatureAlgorithm.ES384.value: hashes.SHA384,
    SignatureAlgorithm.ES512.value: hashes.SHA512,
    SignatureAlgorithm.PS256.value: hashes.SHA256,
    SignatureAlgorithm.PS384.value: hashes.SHA384,
    SignatureAlgorithm.PS512.value: hashes.SHA512,
    SignatureAlgorithm.RS256.value: hashes.SHA256,
    SignatureAlgorithm.RS384.value: hashes.SHA384,
    SignatureAlgorithm.RS512.value: hashes.SHA512,
}

# Read-only view; use register_algorithm() to extend
HASH_ALGORITHMS = MappingProxyType(_HASH_ALGORITHMS)


def algorithm_name(algorithm: SignatureAlgorithm | str) -> str:
    """Return the wire name of an algorithm."""
    if isinstance(algorithm, Enum):
        return algorithm.value
    return algorithm


def register_algorithm(algorithm: str, hash_algorithm: type[hashes.HashAlgorithm]) -> None:
    """Register an additional signature algorithm.

    Args:
        algorithm: Algorithm name as understood by the key service
        hash_algorithm: ``cryptography`` hash class the algorithm digests with

    Raises:
        ValueError: If the hash cannot be built without arguments, or the
            name is already mapped to a different hash
    """
    name = algorithm_name(algorithm)
    try:
        instance = hash_algorithm()
    except TypeError as e:
        raise ValueError(f"Hash for {name} must be constructible without arguments: {e}") from e
    if not isinstance(instance, hashes.HashAlgorithm):
        raise ValueError(f"Hash for {name} must be a cryptography HashAlgorithm")

    existing = _HASH_ALGORITHMS.get(name)
    if existing is not None:
        if existing is hash_algorithm:
            return
        raise ValueError(
            f"Algorithm {name} is already registered with {existing.name}"
        )
    _HASH_ALGORITHMS[name] = hash_algorithm


def digest_algorithm_for(algorithm: SignatureAlgorithm | str) -> hashes.HashAlgorithm:
    """Look up the digest algorithm for a signature algorithm.

    Args:
        algorithm: Signature algorithm name

    Returns:
        Hash algorithm instance

    Raises:
        UnsupportedAlgorithmError: If the algorithm is unknown or the hash is
            not available in the cryptography backend
    """
    name = algorithm_name(algorithm)
    hash_cls = _HASH_ALGORITHMS.get(name)
    if hash_cls is None:
        raise UnsupportedAlgorithmError(
            f"Unsupported algorithm: {name}. "
            f"Supported: {', '.join(sorted(_HASH_ALGORITHMS))}"
        )

    hash_algorithm = hash_cls()
    if not default_backend().hash_supported(hash_algorithm):
        raise UnsupportedAlgorithmError(
            f"Hash {hash_algorithm.name} for {name} is not available"
        )
    return hash_algorithm


def compute_digest(algorithm: SignatureAlgorithm | str, message: bytes) -> bytes:
    """Hash a message with the digest algorithm of a signature algorithm."""
    digest = hashes.Hash(digest_algorithm_for(algorithm))
    digest.update(message)
    return digest.finalize()
