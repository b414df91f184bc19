"""
Batch Account Service.

Quota check and idempotent acquisition of the Batch account, plus the
account-management walkthrough steps (application update, listing, key
rotation, deletion).

Acquisition Rules:
    1. An account with the desired name anywhere in the subscription is reused.
    2. Otherwise, if the region already holds as many accounts as the quota
       allows, acquisition is refused before anything is created.
    3. Otherwise the resource group, the auto-storage account, the Batch
       account, its application and application package are created.

Exports:
    AccountHandle: Acquired account and where it lives
    BatchAccountService: Account workflow steps
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from config.account_config import AccountConfig
from core.logic import evaluate_quota, find_account_by_name, resource_group_from_id
from core.models import QuotaCheck
from exceptions import QuotaExceededError, ResourceNotFoundError
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "BatchAccountService")


@dataclass
class AccountHandle:
    """An acquired Batch account."""
    account: Any
    resource_group: str
    created: bool
    storage_account_name: Optional[str] = None

    @property
    def name(self) -> str:
        return self.account.name


class BatchAccountService:
    """
    Account-level workflow steps.

    Args:
        repos: infrastructure.ManagementRepositories
        config: AccountConfig
    """

    def __init__(self, repos, config: AccountConfig):
        self.repos = repos
        self.config = config

    # ========================================================================
    # Quota
    # ========================================================================

    def check_quota(self) -> QuotaCheck:
        """
        Compare the region's account quota with the accounts already there.

        The refusal message is logged here; callers decide how to stop.
        """
        region = self.config.region
        allowed = self.repos.batch_accounts.get_account_quota(region)
        accounts = self.repos.batch_accounts.list_accounts()

        check = evaluate_quota(allowed, accounts, region, self.config.account_name)

        logger.info(
            f"📊 Batch account quota in {check.region}: {check.existing_in_region}/{check.allowed} used",
            extra={'custom_dimensions': {
                'region': check.region,
                'allowed': check.allowed,
                'existing_in_region': check.existing_in_region,
                'reusable_account': check.reusable_account,
            }}
        )

        if not check.should_proceed:
            logger.warning(str(QuotaExceededError(check.region, check.existing_in_region, check.allowed)))

        return check

    # ========================================================================
    # Acquisition
    # ========================================================================

    def acquire_account(self, check: QuotaCheck) -> AccountHandle:
        """
        Reuse or create the Batch account.

        Raises:
            QuotaExceededError: If a new account is needed but the quota is used up
        """
        if check.reusable_account:
            return self._reuse_account(check.reusable_account)

        if not check.can_create:
            raise QuotaExceededError(check.region, check.existing_in_region, check.allowed)

        return self._create_account()

    def _reuse_account(self, name: str) -> AccountHandle:
        existing = find_account_by_name(self.repos.batch_accounts.list_accounts(), name)
        if existing is None:
            raise ResourceNotFoundError(f"Batch account '{name}' disappeared before it could be reused")

        resource_group = resource_group_from_id(existing.id) or self.config.resource_group
        logger.info(f"♻️ Reusing Batch account {name} in resource group {resource_group}")

        account = self.repos.batch_accounts.get_account(resource_group, name)
        handle = AccountHandle(account=account, resource_group=resource_group, created=False)
        self.ensure_application(handle)
        return handle

    def _create_account(self) -> AccountHandle:
        cfg = self.config
        logger.info("🏭 Creating a batch Account")

        self.repos.resource_groups.create(cfg.resource_group, cfg.region)

        storage = self.repos.storage_accounts.create(
            cfg.resource_group,
            cfg.storage_account_name,
            cfg.region,
            sku=cfg.storage_sku,
            kind=cfg.storage_kind
        )

        account = self.repos.batch_accounts.create_account(
            cfg.resource_group,
            cfg.account_name,
            cfg.region,
            storage_account_id=storage.id
        )

        handle = AccountHandle(
            account=account,
            resource_group=cfg.resource_group,
            created=True,
            storage_account_name=cfg.storage_account_name
        )

        self.repos.batch_accounts.create_application(
            cfg.resource_group,
            cfg.account_name,
            cfg.application_name,
            display_name=cfg.application_display_name,
            allow_updates=True
        )
        self.repos.batch_accounts.create_application_package(
            cfg.resource_group,
            cfg.account_name,
            cfg.application_name,
            cfg.application_package_version
        )

        logger.info(
            f"✅ Created a batch Account: {account.name}",
            extra={'custom_dimensions': {
                'account_name': account.name,
                'account_endpoint': account.account_endpoint,
                'resource_group': cfg.resource_group,
                'storage_account': cfg.storage_account_name,
            }}
        )
        return handle

    def ensure_application(self, handle: AccountHandle) -> None:
        """Create the configured application on a reused account if it is missing."""
        cfg = self.config
        applications = self.repos.batch_accounts.list_applications(handle.resource_group, handle.name)
        if any(app.name == cfg.application_name for app in applications):
            return

        logger.info(f"📦 Application {cfg.application_name} missing on {handle.name}, creating it")
        self.repos.batch_accounts.create_application(
            handle.resource_group,
            handle.name,
            cfg.application_name,
            display_name=cfg.application_display_name,
            allow_updates=True
        )

    # ========================================================================
    # Account management steps
    # ========================================================================

    def update_application_display_name(self, handle: AccountHandle, display_name: Optional[str] = None):
        return self.repos.batch_accounts.update_application(
            handle.resource_group,
            handle.name,
            self.config.application_name,
            display_name or self.config.updated_application_display_name
        )

    def refresh_account(self, handle: AccountHandle):
        """Re-read the account and store it on the handle."""
        handle.account = self.repos.batch_accounts.get_account(handle.resource_group, handle.name)
        return handle.account

    def list_accounts_in_group(self, resource_group: str) -> List:
        logger.info("📋 Listing Batch accounts")
        accounts = self.repos.batch_accounts.list_accounts_in_group(resource_group)
        for index, account in enumerate(accounts):
            logger.info(f"Batch Account ({index}) {account.name}")
        return accounts

    def get_account_keys(self, handle: AccountHandle):
        """Shared keys (primary, secondary) of the account."""
        return self.repos.batch_accounts.get_keys(handle.resource_group, handle.name)

    def get_primary_key(self, handle: AccountHandle) -> str:
        return self.get_account_keys(handle).primary

    def rotate_account_keys(self, handle: AccountHandle):
        """Regenerate the primary key; returns the new key set."""
        return self.repos.batch_accounts.regenerate_key(handle.resource_group, handle.name, "Primary")

    def rotate_storage_keys_and_sync(self, handle: AccountHandle) -> bool:
        """
        Regenerate the auto-storage key and let the Batch account pick it up.

        Returns:
            False when the account was reused and its storage account is unknown
        """
        if not handle.storage_account_name:
            logger.info(f"⏭️ Storage account of {handle.name} unknown, skipping storage key rotation")
            return False
        self.repos.storage_accounts.regenerate_key(handle.resource_group, handle.storage_account_name, "key1")
        self.repos.batch_accounts.synchronize_auto_storage_keys(handle.resource_group, handle.name)
        return True

    @log_exceptions(ComponentType.SERVICE, "BatchAccountService")
    def delete_account(self, handle: AccountHandle) -> None:
        """Delete application packages, then applications, then the account."""
        batch_accounts = self.repos.batch_accounts
        rg, name = handle.resource_group, handle.name

        for application in batch_accounts.list_applications(rg, name):
            for package in batch_accounts.list_application_packages(rg, name, application.name):
                batch_accounts.delete_application_package(rg, name, application.name, package.name)
            batch_accounts.delete_application(rg, name, application.name)

        batch_accounts.delete_account(rg, name)
