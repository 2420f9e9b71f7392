# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Exceptions for remote JWT signing operations."""


class RemoteSignerError(Exception):
    """Base exception for remote signing errors."""
    pass


class InvalidKeyIdentifierError(RemoteSignerError):
    """Exception raised when a key identifier is not a valid Key Vault key URL."""
    pass


class UnsupportedAlgorithmError(RemoteSignerError):
    """Exception raised when an algorithm is unknown or its hash is unavailable."""
    pass


class InvalidDigestError(RemoteSignerError):
    """Exception raised when a digest does not match the algorithm's hash size."""
    pass


class ResponseKeyMismatchError(RemoteSignerError):
    """Exception raised when the service answered with a different key id."""
    pass


class InvalidServerResponseError(RemoteSignerError):
    """Exception raised when a required response field is missing or malformed."""
    pass


class VerificationError(RemoteSignerError):
    """Exception raised when the service reports a signature as invalid."""
    pass


class InvalidKeyTypeError(RemoteSignerError):
    """Exception raised when a signing method receives a key it cannot use."""
    pass


class SignatureDecodeError(RemoteSignerError, ValueError):
    """Exception raised when a signature is not valid base64url."""
    pass
