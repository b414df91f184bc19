"""
Storage Account Repository.

Creates the auto-storage account linked to the Batch account and
regenerates its keys.

Exports:
    StorageAccountRepository
"""

from azure.mgmt.storage.models import (
    Sku,
    StorageAccountCreateParameters,
    StorageAccountRegenerateKeyParameters,
)

from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "StorageAccountRepository")


class StorageAccountRepository:
    """
    Storage account operations.

    Args:
        client: azure.mgmt.storage.StorageManagementClient
    """

    def __init__(self, client):
        self.client = client

    def create(self, resource_group: str, name: str, region: str,
               sku: str = "Standard_LRS", kind: str = "StorageV2"):
        """
        Create a storage account and block until provisioning completes.

        Returns:
            azure.mgmt.storage.models.StorageAccount
        """
        logger.info(f"💾 Creating storage account {name} ({sku}, {kind})")
        parameters = StorageAccountCreateParameters(
            sku=Sku(name=sku),
            kind=kind,
            location=region
        )
        try:
            account = self.client.storage_accounts.begin_create(resource_group, name, parameters).result()
        except Exception as e:
            logger.error(
                f"❌ Failed to create storage account {name}: {e}",
                extra={'custom_dimensions': {
                    'error_source': 'infrastructure',
                    'error_type': type(e).__name__,
                    'resource_group': resource_group,
                }}
            )
            raise
        logger.info(f"✅ Storage account created: {account.id}")
        return account

    def regenerate_key(self, resource_group: str, name: str, key_name: str = "key1"):
        """Regenerate one of the storage account's access keys."""
        logger.info(f"🔑 Regenerating storage key {key_name} for {name}")
        return self.client.storage_accounts.regenerate_key(
            resource_group,
            name,
            StorageAccountRegenerateKeyParameters(key_name=key_name)
        )
