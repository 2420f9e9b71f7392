# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Remote JWT signing with Azure Key Vault keys.

This adapter lets PyJWT sign and verify tokens with keys that never leave
Key Vault: digests are computed locally, signed remotely, and every
service response is checked before a signature is released.
"""

__version__ = "0.1.0"

from .algorithms import (
    HASH_ALGORITHMS,
    SignatureAlgorithm,
    compute_digest,
    digest_algorithm_for,
    register_algorithm,
)
from .azure_client import AzureKeyVaultClient
from .client import RemoteKeyClient, SignRequest, SignResponse, VerifyRequest, VerifyResponse
from .config import DriverConfig, load_driver_config
from .exceptions import (
    InvalidDigestError,
    InvalidKeyIdentifierError,
    InvalidKeyTypeError,
    InvalidServerResponseError,
    RemoteSignerError,
    ResponseKeyMismatchError,
    SignatureDecodeError,
    UnsupportedAlgorithmError,
    VerificationError,
)
from .factory import create_remote_signer
from .key import KeyLocator, RemoteKey, parse_key_id
from .method import SIGNING_METHODS, SigningMethod, create_jws

__all__ = [
    "__version__",
    "HASH_ALGORITHMS",
    "SignatureAlgorithm",
    "compute_digest",
    "digest_algorithm_for",
    "register_algorithm",
    "RemoteKeyClient",
    "AzureKeyVaultClient",
    "SignRequest",
    "SignResponse",
    "VerifyRequest",
    "VerifyResponse",
    "DriverConfig",
    "load_driver_config",
    "create_remote_signer",
    "KeyLocator",
    "RemoteKey",
    "parse_key_id",
    "SIGNING_METHODS",
    "SigningMethod",
    "create_jws",
    "RemoteSignerError",
    "InvalidKeyIdentifierError",
    "UnsupportedAlgorithmError",
    "InvalidDigestError",
    "ResponseKeyMismatchError",
    "InvalidServerResponseError",
    "VerificationError",
    "InvalidKeyTypeError",
    "SignatureDecodeError",
]

