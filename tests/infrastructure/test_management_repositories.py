"""
Management-plane repository tests: resource groups, storage, Batch accounts.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from azure.core.exceptions import ResourceNotFoundError as AzureResourceNotFoundError

from exceptions import ResourceNotFoundError
from infrastructure.batch_management import BatchManagementRepository
from infrastructure.resource_groups import ResourceGroupRepository
from infrastructure.storage_accounts import StorageAccountRepository


class TestResourceGroupRepository:

    def test_delete_waits_for_completion(self):
        client = MagicMock()
        ResourceGroupRepository(client).delete("rg-demo")
        client.resource_groups.begin_delete.assert_called_once_with("rg-demo")
        client.resource_groups.begin_delete.return_value.result.assert_called_once()

    def test_create_passes_location(self):
        client = MagicMock()
        ResourceGroupRepository(client).create("rg-demo", "eastus")
        client.resource_groups.create_or_update.assert_called_once_with("rg-demo", {'location': "eastus"})

    def test_create_failure_reraised(self):
        client = MagicMock()
        client.resource_groups.create_or_update.side_effect = RuntimeError("denied")
        with pytest.raises(RuntimeError):
            ResourceGroupRepository(client).create("rg-demo", "eastus")

    def test_exists(self):
        client = MagicMock()
        client.resource_groups.check_existence.return_value = False
        assert ResourceGroupRepository(client).exists("rg-demo") is False


class TestStorageAccountRepository:

    def test_create_uses_sku_and_kind(self):
        client = MagicMock()
        client.storage_accounts.begin_create.return_value.result.return_value = SimpleNamespace(id="sa-id")

        account = StorageAccountRepository(client).create("rg", "sa1", "eastus")

        assert account.id == "sa-id"
        rg, name, params = client.storage_accounts.begin_create.call_args.args
        assert (rg, name) == ("rg", "sa1")
        assert params.sku.name == "Standard_LRS"
        assert params.kind == "StorageV2"
        assert params.location == "eastus"

    def test_regenerate_key(self):
        client = MagicMock()
        StorageAccountRepository(client).regenerate_key("rg", "sa1")
        params = client.storage_accounts.regenerate_key.call_args.args[2]
        assert params.key_name == "key1"


class TestBatchManagementRepository:

    def test_quota_reads_account_quota(self):
        client = MagicMock()
        client.location.get_quotas.return_value = SimpleNamespace(account_quota=5)
        assert BatchManagementRepository(client).get_account_quota("eastus") == 5
        client.location.get_quotas.assert_called_once_with("eastus")

    def test_create_account_links_storage(self):
        client = MagicMock()
        client.batch_account.begin_create.return_value.result.return_value = SimpleNamespace(
            name="ba1", account_endpoint="ba1.eastus.batch.azure.com"
        )
        BatchManagementRepository(client).create_account("rg", "ba1", "eastus", storage_account_id="sa-id")

        params = client.batch_account.begin_create.call_args.args[2]
        assert params.location == "eastus"
        assert params.auto_storage.storage_account_id == "sa-id"

    def test_get_account_not_found_translated(self):
        client = MagicMock()
        client.batch_account.get.side_effect = AzureResourceNotFoundError("missing")
        with pytest.raises(ResourceNotFoundError, match="ba1"):
            BatchManagementRepository(client).get_account("rg", "ba1")

    def test_update_application_sets_display_name(self):
        client = MagicMock()
        BatchManagementRepository(client).update_application("rg", "ba1", "application", "New application display name")
        params = client.application.update.call_args.args[3]
        assert params.display_name == "New application display name"

    def test_regenerate_primary_key(self):
        client = MagicMock()
        BatchManagementRepository(client).regenerate_key("rg", "ba1")
        params = client.batch_account.regenerate_key.call_args.args[2]
        assert str(getattr(params.key_name, 'value', params.key_name)) == "Primary"

    def test_delete_account_waits(self):
        client = MagicMock()
        BatchManagementRepository(client).delete_account("rg", "ba1")
        client.batch_account.begin_delete.return_value.result.assert_called_once()
