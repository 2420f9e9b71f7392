# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Test fixtures for the keyvault_jwt adapter."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any
from unittest.mock import MagicMock

import pytest

from keyvault_jwt.client import RemoteKeyClient, SignResponse, VerifyResponse
from keyvault_jwt.encoding import b64url_decode, b64url_encode

KEY_ID = "https://vault.example/keys/mykey/abc123"


class StubKeyClient(RemoteKeyClient):
    """In-memory client that records calls.

    By default it "signs" by prefixing the digest and echoes the requested key
    id. Tests override ``sign_response``/``verify_response`` to simulate a
    misbehaving service.
    """

    def __init__(self):
        self.calls: list[tuple[str, tuple, dict[str, Any]]] = []
        self.sign_response: SignResponse | None = None
        self.verify_response: VerifyResponse | None = None

    def sign(self, vault_url, key_name, key_version, request, **kwargs):
        self.calls.append(("sign", (vault_url, key_name, key_version, request), kwargs))
        if self.sign_response is not None:
            return self.sign_response
        signature = b"signed:" + b64url_decode(request.value)
        return SignResponse(
            kid=f"{vault_url}/keys/{key_name}/{key_version}",
            result=b64url_encode(signature),
        )

    def verify(self, vault_url, key_name, key_version, request, **kwargs):
        self.calls.append(("verify", (vault_url, key_name, key_version, request), kwargs))
        if self.verify_response is not None:
            return self.verify_response
        expected = b"signed:" + b64url_decode(request.digest)
        return VerifyResponse(value=b64url_decode(request.signature) == expected)


@pytest.fixture
def key_id() -> str:
    return KEY_ID


@pytest.fixture
def stub_client() -> StubKeyClient:
    return StubKeyClient()


@pytest.fixture
def remote_key(stub_client):
    from keyvault_jwt import RemoteKey

    return RemoteKey(stub_client, KEY_ID)


class FakeSignatureAlgorithm(str, Enum):
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


@dataclass(frozen=True)
class AzureSdkMocks:
    """Per-test Azure SDK mocks.

    We patch `sys.modules` so `AzureKeyVaultClient` can import Azure SDK
    symbols without requiring Azure dependencies to be installed.
    """

    cryptography_client_cls: MagicMock
    default_credential_cls: MagicMock


@pytest.fixture
def azure_sdk_mocks(monkeypatch: pytest.MonkeyPatch) -> AzureSdkMocks:
    """Provide per-test Azure SDK module mocks via `sys.modules`."""

    cryptography_client_cls = MagicMock(name="CryptographyClient")
    default_credential_cls = MagicMock(name="DefaultAzureCredential")

    monkeypatch.setitem(sys.modules, "azure", MagicMock())
    monkeypatch.setitem(sys.modules, "azure.keyvault", MagicMock())
    monkeypatch.setitem(sys.modules, "azure.keyvault.keys", MagicMock())
    monkeypatch.setitem(
        sys.modules,
        "azure.keyvault.keys.crypto",
        MagicMock(
            CryptographyClient=cryptography_client_cls,
            SignatureAlgorithm=FakeSignatureAlgorithm,
        ),
    )
    monkeypatch.setitem(
        sys.modules,
        "azure.identity",
        MagicMock(DefaultAzureCredential=default_credential_cls),
    )

    return AzureSdkMocks(
        cryptography_client_cls=cryptography_client_cls,
        default_credential_cls=default_credential_cls,
    )
