"""
Azure Management Credentials.

Builds the azure-identity credential used by every management-plane client.

    AZURE_AUTH_LOCATION set    -> ClientSecretCredential from the credential file
    AZURE_AUTH_LOCATION unset  -> DefaultAzureCredential + AZURE_SUBSCRIPTION_ID

Exports:
    ManagementCredential: credential + subscription + optional ARM endpoint
    get_management_credential: Build a ManagementCredential from AuthConfig
"""

from dataclasses import dataclass
from typing import Any, Optional

from azure.identity import ClientSecretCredential, DefaultAzureCredential

from config.auth_config import AuthConfig
from exceptions import ConfigurationError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.FACTORY, "ManagementCredential")


@dataclass
class ManagementCredential:
    """Credential and subscription shared by the management clients."""
    credential: Any
    subscription_id: str
    resource_manager_url: Optional[str] = None

    def client_kwargs(self) -> dict:
        """Keyword arguments common to all azure-mgmt-* client constructors."""
        kwargs = {
            'credential': self.credential,
            'subscription_id': self.subscription_id,
        }
        if self.resource_manager_url:
            kwargs['base_url'] = self.resource_manager_url
        return kwargs


def get_management_credential(auth: AuthConfig) -> ManagementCredential:
    """
    Build the management-plane credential.

    Raises:
        ConfigurationError: If neither a credential file nor a subscription is configured
    """
    if auth.uses_auth_file:
        creds = auth.load_credentials()
        logger.info(
            f"🔐 Creating ClientSecretCredential from {auth.auth_location}",
            extra={'custom_dimensions': {
                'client_id': creds.client_id,
                'tenant_id': creds.tenant_id,
            }}
        )
        credential_kwargs = {}
        if creds.authority_host:
            credential_kwargs['authority'] = creds.authority_host
        credential = ClientSecretCredential(
            tenant_id=creds.tenant_id,
            client_id=creds.client_id,
            client_secret=creds.client_secret,
            **credential_kwargs
        )
        return ManagementCredential(
            credential=credential,
            subscription_id=creds.subscription_id,
            resource_manager_url=creds.resource_manager_url
        )

    if not auth.subscription_id:
        raise ConfigurationError(
            "No Azure authentication configured. Set AZURE_AUTH_LOCATION to a "
            "credential file, or AZURE_SUBSCRIPTION_ID to use DefaultAzureCredential."
        )

    logger.info("🔐 Creating DefaultAzureCredential")
    return ManagementCredential(
        credential=DefaultAzureCredential(),
        subscription_id=auth.subscription_id
    )
