"""
Azure Batch Management Repository.

Management-plane access to Batch accounts through azure-mgmt-batch.

Key Features:
    - Region account quota lookup
    - Subscription / resource group account listing
    - Account creation with linked auto-storage
    - Applications and application packages
    - Account key retrieval, regeneration and auto-storage key sync
    - Account deletion

Exports:
    BatchManagementRepository
"""

from typing import List, Optional

from azure.core.exceptions import ResourceNotFoundError as AzureResourceNotFoundError
from azure.mgmt.batch.models import (
    Application,
    AutoStorageBaseProperties,
    BatchAccountCreateParameters,
    BatchAccountRegenerateKeyParameters,
)

from exceptions import ResourceNotFoundError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "BatchManagementRepository")


class BatchManagementRepository:
    """
    Batch account management operations.

    Args:
        client: azure.mgmt.batch.BatchManagementClient

    Example:
        repo = BatchManagementRepository(BatchManagementClient(credential, subscription_id))
        allowed = repo.get_account_quota("eastus")
        accounts = repo.list_accounts()
    """

    def __init__(self, client):
        self.client = client

    # ========================================================================
    # Quota and listing
    # ========================================================================

    def get_account_quota(self, region: str) -> int:
        """Number of Batch accounts the subscription may hold in the region."""
        quota = self.client.location.get_quotas(region)
        logger.debug(f"📊 Batch account quota for {region}: {quota.account_quota}")
        return quota.account_quota

    def list_accounts(self) -> List:
        """All Batch accounts visible to the subscription."""
        return list(self.client.batch_account.list())

    def list_accounts_in_group(self, resource_group: str) -> List:
        return list(self.client.batch_account.list_by_resource_group(resource_group))

    def get_account(self, resource_group: str, name: str):
        """
        Fetch a Batch account.

        Raises:
            ResourceNotFoundError: If the account does not exist
        """
        try:
            return self.client.batch_account.get(resource_group, name)
        except AzureResourceNotFoundError as e:
            raise ResourceNotFoundError(
                f"Batch account '{name}' not found in resource group '{resource_group}'"
            ) from e

    # ========================================================================
    # Account lifecycle
    # ========================================================================

    def create_account(self, resource_group: str, name: str, region: str,
                       storage_account_id: Optional[str] = None):
        """
        Create a Batch account and block until provisioning completes.

        Args:
            storage_account_id: ARM id of the auto-storage account, if any
        """
        auto_storage = (
            AutoStorageBaseProperties(storage_account_id=storage_account_id)
            if storage_account_id else None
        )
        parameters = BatchAccountCreateParameters(location=region, auto_storage=auto_storage)

        logger.info(f"🏭 Creating Batch account {name} in {region}")
        try:
            account = self.client.batch_account.begin_create(resource_group, name, parameters).result()
        except Exception as e:
            logger.error(
                f"❌ Failed to create Batch account {name}: {e}",
                extra={'custom_dimensions': {
                    'error_source': 'infrastructure',
                    'error_type': type(e).__name__,
                    'resource_group': resource_group,
                    'account_name': name,
                }}
            )
            raise
        logger.info(f"✅ Batch account created: {account.account_endpoint}")
        return account

    def delete_account(self, resource_group: str, name: str) -> None:
        logger.info(f"🗑️ Deleting Batch account {name}")
        self.client.batch_account.begin_delete(resource_group, name).result()
        logger.info(f"✅ Deleted Batch account {name}")

    # ========================================================================
    # Keys
    # ========================================================================

    def get_keys(self, resource_group: str, name: str):
        """Shared keys of the account (primary, secondary)."""
        return self.client.batch_account.get_keys(resource_group, name)

    def regenerate_key(self, resource_group: str, name: str, key_name: str = "Primary"):
        logger.info(f"🔑 Regenerating {key_name} key for Batch account {name}")
        return self.client.batch_account.regenerate_key(
            resource_group,
            name,
            BatchAccountRegenerateKeyParameters(key_name=key_name)
        )

    def synchronize_auto_storage_keys(self, resource_group: str, name: str) -> None:
        logger.info(f"🔄 Synchronizing auto-storage keys for Batch account {name}")
        self.client.batch_account.synchronize_auto_storage_keys(resource_group, name)

    # ========================================================================
    # Applications
    # ========================================================================

    def create_application(self, resource_group: str, account_name: str, application_name: str,
                           display_name: Optional[str] = None, allow_updates: bool = True):
        logger.info(f"📦 Creating application {application_name} in {account_name}")
        return self.client.application.create(
            resource_group,
            account_name,
            application_name,
            Application(display_name=display_name, allow_updates=allow_updates)
        )

    def update_application(self, resource_group: str, account_name: str, application_name: str,
                           display_name: str):
        logger.info(f"✏️ Updating application {application_name} display name to '{display_name}'")
        return self.client.application.update(
            resource_group,
            account_name,
            application_name,
            Application(display_name=display_name)
        )

    def list_applications(self, resource_group: str, account_name: str) -> List:
        return list(self.client.application.list(resource_group, account_name))

    def delete_application(self, resource_group: str, account_name: str, application_name: str) -> None:
        logger.info(f"🗑️ Deleting application {application_name}")
        self.client.application.delete(resource_group, account_name, application_name)

    def create_application_package(self, resource_group: str, account_name: str,
                                   application_name: str, version: str):
        logger.info(f"📦 Creating application package {application_name}/{version}")
        return self.client.application_package.create(
            resource_group, account_name, application_name, version
        )

    def list_application_packages(self, resource_group: str, account_name: str,
                                  application_name: str) -> List:
        return list(self.client.application_package.list(resource_group, account_name, application_name))

    def delete_application_package(self, resource_group: str, account_name: str,
                                   application_name: str, version: str) -> None:
        logger.info(f"🗑️ Deleting application package {application_name}/{version}")
        self.client.application_package.delete(resource_group, account_name, application_name, version)
