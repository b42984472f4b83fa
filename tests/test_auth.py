import pytest
from unittest.mock import MagicMock

from azure.core.exceptions import ClientAuthenticationError

from metrics import auth
from metrics.auth import ARM_SCOPE, AuthenticationError, get_access_token, get_credential


def test_get_access_token_returns_token_string(credential):
    assert get_access_token(credential) == "test-token"
    credential.get_token.assert_called_once_with(ARM_SCOPE)


def test_get_access_token_wraps_auth_failure():
    cred = MagicMock()
    cred.get_token.side_effect = ClientAuthenticationError(message="no identity endpoint")

    with pytest.raises(AuthenticationError):
        get_access_token(cred)


def test_get_credential_user_assigned(monkeypatch):
    created = {}

    def fake_credential(**kwargs):
        created.update(kwargs)
        return MagicMock()

    monkeypatch.setattr(auth, 'ManagedIdentityCredential', fake_credential)

    get_credential("client-123")
    assert created == {"client_id": "client-123"}


def test_get_credential_system_assigned(monkeypatch):
    created = []
    monkeypatch.setattr(auth, 'AZURE_CLIENT_ID', None)
    monkeypatch.setattr(auth, 'ManagedIdentityCredential', lambda **kw: created.append(kw) or MagicMock())

    get_credential()
    assert created == [{}]
