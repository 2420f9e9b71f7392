# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""PyJWT signing methods backed by remote Key Vault keys."""

import logging
from typing import Any, NoReturn

from jwt.algorithms import Algorithm
from jwt.api_jws import PyJWS

from .algorithms import SignatureAlgorithm, algorithm_name, digest_algorithm_for
from .encoding import b64url_decode, b64url_encode
from .exceptions import InvalidKeyTypeError, SignatureDecodeError, VerificationError
from .key import RemoteKey

logger = logging.getLogger("keyvault_jwt.method")


class SigningMethod(Algorithm):
    """Signing method that delegates to a :class:`RemoteKey`.

    The method plugs into PyJWT as an ``Algorithm`` and also offers the
    string-level ``sign_string``/``verify_string`` pair operating on JWS
    signing input and base64url signatures.

    Attributes:
        algorithm: Signature algorithm this method produces
    """

    def __init__(self, algorithm: SignatureAlgorithm | str):
        """Initialize the signing method.

        Raises:
            UnsupportedAlgorithmError: If the algorithm is not supported
        """
        digest_algorithm_for(algorithm)
        self.algorithm = algorithm_name(algorithm)

    def __repr__(self) -> str:
        return f"SigningMethod({self.algorithm!r})"

    def algorithm_id(self) -> str:
        """Return the JOSE ``alg`` value of this method."""
        return self.algorithm

    def prepare_key(self, key: Any) -> RemoteKey:
        if not isinstance(key, RemoteKey):
            raise InvalidKeyTypeError(
                f"{self.algorithm} requires a RemoteKey, got {type(key).__name__}"
            )
        return key

    def sign(self, msg: bytes, key: Any) -> bytes:
        return self.prepare_key(key).sign(self.algorithm, msg)

    def verify(self, msg: bytes, key: Any, sig: bytes) -> bool:
        remote_key = self.prepare_key(key)
        try:
            remote_key.verify(self.algorithm, msg, sig)
        except VerificationError:
            return False
        return True

    def sign_string(self, signing_string: str, key: Any) -> str:
        """Sign JWS signing input remotely.

        Args:
            signing_string: ``<header>.<payload>`` signing input
            key: RemoteKey to sign with

        Returns:
            base64url-encoded signature without padding

        Raises:
            InvalidKeyTypeError: If key is not a RemoteKey
        """
        remote_key = self.prepare_key(key)
        signature = remote_key.sign(self.algorithm, signing_string.encode("utf-8"))
        return b64url_encode(signature)

    def verify_string(self, signing_string: str, signature: str, key: Any) -> None:
        """Verify JWS signing input against a base64url signature remotely.

        Raises:
            InvalidKeyTypeError: If key is not a RemoteKey
            SignatureDecodeError: If the signature is not valid base64url
            VerificationError: If the signature does not match
        """
        remote_key = self.prepare_key(key)
        try:
            sig = b64url_decode(signature)
        except ValueError as e:
            raise SignatureDecodeError(str(e)) from e
        remote_key.verify(self.algorithm, signing_string.encode("utf-8"), sig)

    @staticmethod
    def to_jwk(key_obj: Any, as_dict: bool = False) -> NoReturn:
        # Remote keys expose no public material through this interface
        raise NotImplementedError()

    @staticmethod
    def from_jwk(jwk: Any) -> NoReturn:
        raise NotImplementedError()


SIGNING_METHODS: dict[str, SigningMethod] = {
    alg.value: SigningMethod(alg) for alg in SignatureAlgorithm
}


def create_jws(*algorithms: SignatureAlgorithm | str) -> PyJWS:
    """Create a PyJWS instance whose algorithms all sign remotely.

    PyJWT's module-level registry is left untouched, so local RS256 and
    friends keep working elsewhere in the process.

    Args:
        *algorithms: Algorithms to enable; all supported ones when omitted

    Returns:
        PyJWS with only remote signing methods registered

    Example:
        >>> jws = create_jws(SignatureAlgorithm.RS256)
        >>> token = jws.encode(b'{"sub": "alice"}', remote_key, algorithm="RS256")
        >>> jws.decode(token, remote_key, algorithms=["RS256"])
        b'{"sub": "alice"}'
    """
    names = [algorithm_name(alg) for alg in algorithms] or list(SIGNING_METHODS)

    jws = PyJWS(algorithms=[])
    for name in names:
        method = SIGNING_METHODS.get(name) or SigningMethod(name)
        jws.register_algorithm(name, method)
        logger.debug("Registered remote signing method %s", name)
    return jws
