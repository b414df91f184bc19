"""
Repository Factory - Central Creation Point

Creates the management-plane repositories from configuration and the
data-plane repository from a provisioned Batch account. The rest of the
code never constructs Azure SDK clients directly.

Exports:
    ManagementRepositories: the three management-plane repositories
    RepositoryFactory: factory methods
"""

from dataclasses import dataclass

from azure.mgmt.batch import BatchManagementClient
from azure.mgmt.resource import ResourceManagementClient
from azure.mgmt.storage import StorageManagementClient

from config.auth_config import AuthConfig
from util_logger import LoggerFactory, ComponentType

from .batch_management import BatchManagementRepository
from .batch_service import BatchServiceRepository
from .credentials import ManagementCredential, get_management_credential
from .resource_groups import ResourceGroupRepository
from .storage_accounts import StorageAccountRepository

logger = LoggerFactory.create_logger(ComponentType.FACTORY, "RepositoryFactory")


@dataclass
class ManagementRepositories:
    """Management-plane repositories sharing one credential and subscription."""
    subscription_id: str
    resource_groups: ResourceGroupRepository
    storage_accounts: StorageAccountRepository
    batch_accounts: BatchManagementRepository


class RepositoryFactory:
    """
    Factory for creating repository instances.

    Example:
        repos = RepositoryFactory.create_management_repositories(config.auth)
        allowed = repos.batch_accounts.get_account_quota("eastus")
    """

    @staticmethod
    def create_management_repositories(auth: AuthConfig) -> ManagementRepositories:
        """Authenticate and create all management-plane repositories."""
        management_credential = get_management_credential(auth)
        return RepositoryFactory.create_from_credential(management_credential)

    @staticmethod
    def create_from_credential(management_credential: ManagementCredential) -> ManagementRepositories:
        logger.info(
            f"🏭 Creating management clients for subscription {management_credential.subscription_id}"
        )
        kwargs = management_credential.client_kwargs()

        repos = ManagementRepositories(
            subscription_id=management_credential.subscription_id,
            resource_groups=ResourceGroupRepository(ResourceManagementClient(**kwargs)),
            storage_accounts=StorageAccountRepository(StorageManagementClient(**kwargs)),
            batch_accounts=BatchManagementRepository(BatchManagementClient(**kwargs)),
        )

        logger.info("✅ Management repositories created")
        return repos

    @staticmethod
    def create_batch_service_repository(account, account_key: str) -> BatchServiceRepository:
        """
        Create the data-plane repository for a provisioned Batch account.

        Args:
            account: azure.mgmt.batch.models.BatchAccount
            account_key: Primary shared key of the account
        """
        return BatchServiceRepository.for_account(
            account_endpoint=account.account_endpoint,
            account_name=account.name,
            account_key=account_key
        )
