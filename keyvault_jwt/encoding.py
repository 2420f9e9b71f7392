# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Unpadded base64url helpers (RFC 7515 section 2)."""

import base64
import binascii
import string

_ALPHABET = frozenset(string.ascii_letters + string.digits + "-_")


def b64url_encode(value: bytes) -> str:
    """Convert bytes to base64url-encoded string without padding."""
    return base64.urlsafe_b64encode(value).decode("ascii").rstrip("=")


def b64url_decode(value: str) -> bytes:
    """Decode an unpadded base64url string.

    Raises:
        ValueError: If the value contains characters outside the base64url
            alphabet (padding included) or has an impossible length
    """
    if not _ALPHABET.issuperset(value):
        raise ValueError("value is not unpadded base64url")
    try:
        return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))
    except binascii.Error as e:
        raise ValueError(f"value is not unpadded base64url: {e}") from e
