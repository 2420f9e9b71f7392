# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for AzureKeyVaultClient with mocked Azure SDK."""

import hashlib
from unittest.mock import MagicMock

import pytest

from keyvault_jwt import AzureKeyVaultClient, RemoteKey
from keyvault_jwt.client import SignRequest, VerifyRequest
from keyvault_jwt.encoding import b64url_encode
from keyvault_jwt.exceptions import ResponseKeyMismatchError, VerificationError


@pytest.fixture
def crypto_client(azure_sdk_mocks, key_id):
    client = azure_sdk_mocks.cryptography_client_cls.return_value
    client.sign.return_value = MagicMock(key_id=key_id, signature=b"mock_signature")
    client.verify.return_value = MagicMock(key_id=key_id, is_valid=True)
    return client


class TestAzureKeyVaultClient:
    """Tests for AzureKeyVaultClient."""

    def test_uses_default_credential(self, azure_sdk_mocks):
        """Test that DefaultAzureCredential is used when none is given."""
        client = AzureKeyVaultClient()

        azure_sdk_mocks.default_credential_cls.assert_called_once_with()
        assert client._credential is azure_sdk_mocks.default_credential_cls.return_value

    def test_uses_given_credential(self, azure_sdk_mocks):
        """Test that an explicit credential is used as-is."""
        credential = MagicMock()

        client = AzureKeyVaultClient(credential=credential)

        azure_sdk_mocks.default_credential_cls.assert_not_called()
        assert client._credential is credential

    def test_sign(self, azure_sdk_mocks, crypto_client, key_id):
        """Test that sign decodes the digest and encodes the signature."""
        digest = hashlib.sha256(b"message").digest()
        client = AzureKeyVaultClient()

        response = client.sign(
            "https://vault.example", "mykey", "abc123",
            SignRequest(algorithm="RS256", value=b64url_encode(digest)),
            timeout=5,
        )

        azure_sdk_mocks.cryptography_client_cls.assert_called_once_with(
            key=key_id, credential=client._credential
        )
        crypto_client.sign.assert_called_once_with("RS256", digest, timeout=5)
        assert response.kid == key_id
        assert response.result == b64url_encode(b"mock_signature")

    def test_sign_without_signature(self, crypto_client):
        """Test that a missing signature stays missing."""
        crypto_client.sign.return_value = MagicMock(key_id="kid", signature=None)

        response = AzureKeyVaultClient().sign(
            "https://vault.example", "mykey", "abc123",
            SignRequest(algorithm="RS256", value=b64url_encode(b"\x00" * 32)),
        )

        assert response.result is None

    def test_verify(self, crypto_client):
        """Test that verify passes decoded values and maps is_valid."""
        digest = hashlib.sha384(b"message").digest()
        crypto_client.verify.return_value = MagicMock(is_valid=False)

        response = AzureKeyVaultClient().verify(
            "https://vault.example", "mykey", "abc123",
            VerifyRequest(
                algorithm="ES384",
                digest=b64url_encode(digest),
                signature=b64url_encode(b"sig"),
            ),
        )

        crypto_client.verify.assert_called_once_with("ES384", digest, b"sig")
        assert response.value is False

    def test_crypto_client_reused_per_key(self, azure_sdk_mocks, crypto_client):
        """Test that one CryptographyClient is created per key identifier."""
        client = AzureKeyVaultClient()
        request = SignRequest(algorithm="RS256", value=b64url_encode(b"\x00" * 32))

        client.sign("https://vault.example", "mykey", "abc123", request)
        client.sign("https://vault.example", "mykey", "abc123", request)
        client.sign("https://vault.example", "mykey", "def456", request)

        assert azure_sdk_mocks.cryptography_client_cls.call_count == 2

    def test_sdk_errors_propagate(self, crypto_client):
        """Test that Azure errors are not wrapped."""
        crypto_client.sign.side_effect = TimeoutError("deadline exceeded")

        with pytest.raises(TimeoutError):
            AzureKeyVaultClient().sign(
                "https://vault.example", "mykey", "abc123",
                SignRequest(algorithm="RS256", value=b64url_encode(b"\x00" * 32)),
            )

    def test_context_manager_closes_resources(self, azure_sdk_mocks, crypto_client):
        """Test that leaving the context closes clients and credential."""
        with AzureKeyVaultClient() as client:
            client.sign(
                "https://vault.example", "mykey", "abc123",
                SignRequest(algorithm="RS256", value=b64url_encode(b"\x00" * 32)),
            )

        crypto_client.close.assert_called_once()
        azure_sdk_mocks.default_credential_cls.return_value.close.assert_called_once()

    def test_close_leaves_given_credential_open(self, azure_sdk_mocks):
        """Test that a caller-owned credential is not closed."""
        credential = MagicMock()

        AzureKeyVaultClient(credential=credential).close()

        credential.close.assert_not_called()


class TestRemoteKeyWithAzureClient:
    """Tests for RemoteKey on top of AzureKeyVaultClient."""

    def test_sign(self, crypto_client, key_id):
        """Test a full sign through the Azure client."""
        key = RemoteKey(AzureKeyVaultClient(), key_id)

        assert key.sign("RS256", b"message") == b"mock_signature"

    def test_sign_rejects_other_key(self, crypto_client, key_id):
        """Test that the service reporting another key is caught."""
        crypto_client.sign.return_value = MagicMock(
            key_id="https://vault.example/keys/mykey/zzz999",
            signature=b"mock_signature",
        )
        key = RemoteKey(AzureKeyVaultClient(), key_id)

        with pytest.raises(ResponseKeyMismatchError):
            key.sign("RS256", b"message")

    def test_verify_failure(self, crypto_client, key_id):
        """Test that is_valid=False surfaces as VerificationError."""
        crypto_client.verify.return_value = MagicMock(is_valid=False)
        key = RemoteKey(AzureKeyVaultClient(), key_id)

        with pytest.raises(VerificationError):
            key.verify("RS256", b"message", b"mock_signature")
