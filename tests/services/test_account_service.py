"""
BatchAccountService tests: quota gate, create-or-reuse, management steps.
"""

from types import SimpleNamespace

import pytest

from config.account_config import AccountConfig
from exceptions import QuotaExceededError
from services.account_service import AccountHandle, BatchAccountService
from tests.factories.azure_factories import make_account, make_management_repos


@pytest.fixture
def account_config():
    return AccountConfig(
        region="eastus",
        resource_group="rg-test",
        account_name="mybatch01",
        storage_account_name="mystorage01",
    )


class TestCheckQuota:

    def test_quota_reached_logs_refusal(self, account_config, caplog):
        repos = make_management_repos(quota=5, accounts=[make_account() for _ in range(5)])
        check = BatchAccountService(repos, account_config).check_quota()

        assert not check.should_proceed
        assert "No more batch accounts can be created at eastus region" in caplog.text
        repos.resource_groups.create.assert_not_called()
        repos.batch_accounts.create_account.assert_not_called()

    def test_under_quota_proceeds(self, account_config):
        repos = make_management_repos(quota=5, accounts=[make_account() for _ in range(2)])
        check = BatchAccountService(repos, account_config).check_quota()
        assert check.should_proceed
        assert check.existing_in_region == 2


class TestAcquireAccount:

    def test_creates_everything_in_order(self, account_config):
        repos = make_management_repos(quota=5)
        service = BatchAccountService(repos, account_config)

        handle = service.acquire_account(service.check_quota())

        assert handle.created
        assert handle.name == "mybatch01"
        assert handle.storage_account_name == "mystorage01"
        repos.resource_groups.create.assert_called_once_with("rg-test", "eastus")
        repos.storage_accounts.create.assert_called_once()
        assert repos.batch_accounts.create_account.call_args.kwargs["storage_account_id"] == \
            repos.storage_accounts.create.return_value.id
        repos.batch_accounts.create_application.assert_called_once()
        assert repos.batch_accounts.create_application.call_args.kwargs["display_name"] == \
            "My application display name"
        repos.batch_accounts.create_application_package.assert_called_once_with(
            "rg-test", "mybatch01", "application", "app_package"
        )

    def test_reuses_existing_account(self, account_config):
        existing = make_account(name="mybatch01", resource_group="rg-other")
        repos = make_management_repos(quota=1, accounts=[existing])
        repos.batch_accounts.list_applications.return_value = [SimpleNamespace(name="application")]
        service = BatchAccountService(repos, account_config)

        handle = service.acquire_account(service.check_quota())

        assert not handle.created
        assert handle.resource_group == "rg-other"
        repos.batch_accounts.create_account.assert_not_called()
        repos.resource_groups.create.assert_not_called()
        repos.batch_accounts.create_application.assert_not_called()

    def test_reused_account_gets_missing_application(self, account_config):
        existing = make_account(name="mybatch01", resource_group="rg-other")
        repos = make_management_repos(quota=1, accounts=[existing])
        service = BatchAccountService(repos, account_config)

        service.acquire_account(service.check_quota())

        repos.batch_accounts.create_application.assert_called_once()

    def test_quota_exhausted_raises(self, account_config):
        repos = make_management_repos(quota=1, accounts=[make_account()])
        service = BatchAccountService(repos, account_config)
        with pytest.raises(QuotaExceededError) as exc_info:
            service.acquire_account(service.check_quota())
        assert exc_info.value.allowed == 1
        repos.resource_groups.create.assert_not_called()


class TestAccountManagement:

    @pytest.fixture
    def handle(self):
        return AccountHandle(
            account=make_account(name="mybatch01", resource_group="rg-test"),
            resource_group="rg-test",
            created=True,
            storage_account_name="mystorage01",
        )

    def test_update_display_name(self, account_config, handle):
        repos = make_management_repos()
        BatchAccountService(repos, account_config).update_application_display_name(handle)
        repos.batch_accounts.update_application.assert_called_once_with(
            "rg-test", "mybatch01", "application", "New application display name"
        )

    def test_primary_key(self, account_config, handle):
        repos = make_management_repos()
        assert BatchAccountService(repos, account_config).get_primary_key(handle) == "primary-key"

    def test_rotate_storage_keys_then_sync(self, account_config, handle):
        repos = make_management_repos()
        assert BatchAccountService(repos, account_config).rotate_storage_keys_and_sync(handle)
        repos.storage_accounts.regenerate_key.assert_called_once_with("rg-test", "mystorage01", "key1")
        repos.batch_accounts.synchronize_auto_storage_keys.assert_called_once_with("rg-test", "mybatch01")

    def test_rotate_storage_skipped_for_reused_account(self, account_config, handle):
        handle.storage_account_name = None
        repos = make_management_repos()
        assert not BatchAccountService(repos, account_config).rotate_storage_keys_and_sync(handle)
        repos.storage_accounts.regenerate_key.assert_not_called()

    def test_rotate_account_keys(self, account_config, handle):
        repos = make_management_repos()
        BatchAccountService(repos, account_config).rotate_account_keys(handle)
        repos.batch_accounts.regenerate_key.assert_called_once_with("rg-test", "mybatch01", "Primary")

    def test_list_accounts_in_group_logs_each(self, account_config, caplog):
        repos = make_management_repos()
        repos.batch_accounts.list_accounts_in_group.return_value = [make_account(name="ba1"), make_account(name="ba2")]
        accounts = BatchAccountService(repos, account_config).list_accounts_in_group("rg-test")
        assert len(accounts) == 2
        assert "Batch Account (1) ba2" in caplog.text

    def test_delete_account_removes_children_first(self, account_config, handle):
        repos = make_management_repos()
        batch_accounts = repos.batch_accounts
        batch_accounts.list_applications.return_value = [SimpleNamespace(name="application")]
        batch_accounts.list_application_packages.return_value = [SimpleNamespace(name="app_package")]

        BatchAccountService(repos, account_config).delete_account(handle)

        names = [c[0] for c in batch_accounts.method_calls
                 if c[0].startswith("delete_")]
        assert names == ["delete_application_package", "delete_application", "delete_account"]
