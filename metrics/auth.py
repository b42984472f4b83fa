"""Ambient managed-identity authentication for the control plane and the query API."""
import logging
from typing import Optional

from azure.core.credentials import TokenCredential
from azure.core.exceptions import ClientAuthenticationError
from azure.identity import CredentialUnavailableError, ManagedIdentityCredential

from config import AZURE_CLIENT_ID

logger = logging.getLogger(__name__)

ARM_SCOPE = "https://management.azure.com/.default"


class AuthenticationError(Exception):
    pass


def get_credential(client_id: Optional[str] = None) -> TokenCredential:
    """Managed identity credential; user-assigned when a client id is configured."""
    client_id = client_id or AZURE_CLIENT_ID
    if client_id:
        logger.info(f"Using user-assigned managed identity {client_id}")
        return ManagedIdentityCredential(client_id=client_id)
    logger.info("Using system-assigned managed identity")
    return ManagedIdentityCredential()


def get_access_token(credential: TokenCredential, scope: str = ARM_SCOPE) -> str:
    try:
        return credential.get_token(scope).token
    except (ClientAuthenticationError, CredentialUnavailableError) as e:
        raise AuthenticationError(f"token acquisition for {scope} failed: {e}")
