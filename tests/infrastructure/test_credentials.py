"""
Management credential selection and repository factory tests.
"""

import json
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from config.auth_config import AuthConfig
from exceptions import ConfigurationError
from infrastructure.credentials import ManagementCredential, get_management_credential
from infrastructure.factory import RepositoryFactory


class TestGetManagementCredential:

    def test_auth_file_uses_client_secret(self, tmp_path):
        path = tmp_path / "my.azureauth"
        path.write_text(json.dumps({
            "clientId": "c", "clientSecret": "s", "tenantId": "t", "subscriptionId": "sub",
        }), encoding="utf-8")

        with patch("infrastructure.credentials.ClientSecretCredential") as credential_cls:
            result = get_management_credential(AuthConfig(auth_location=str(path)))

        credential_cls.assert_called_once_with(tenant_id="t", client_id="c", client_secret="s")
        assert result.subscription_id == "sub"

    def test_subscription_uses_default_credential(self):
        with patch("infrastructure.credentials.DefaultAzureCredential") as credential_cls:
            result = get_management_credential(AuthConfig(subscription_id="sub"))
        credential_cls.assert_called_once_with()
        assert result.subscription_id == "sub"

    def test_nothing_configured(self):
        with pytest.raises(ConfigurationError):
            get_management_credential(AuthConfig())


class TestManagementCredential:

    def test_base_url_only_when_set(self):
        assert 'base_url' not in ManagementCredential("cred", "sub").client_kwargs()
        kwargs = ManagementCredential("cred", "sub", "https://management.azure.com/").client_kwargs()
        assert kwargs['base_url'] == "https://management.azure.com/"


class TestRepositoryFactory:

    def test_create_from_credential(self):
        with patch("infrastructure.factory.ResourceManagementClient") as rm, \
                patch("infrastructure.factory.StorageManagementClient") as sm, \
                patch("infrastructure.factory.BatchManagementClient") as bm:
            repos = RepositoryFactory.create_from_credential(ManagementCredential("cred", "sub"))

        for client_cls in (rm, sm, bm):
            client_cls.assert_called_once_with(credential="cred", subscription_id="sub")
        assert repos.subscription_id == "sub"
        assert repos.batch_accounts.client is bm.return_value

    def test_create_batch_service_repository(self):
        account = SimpleNamespace(name="ba1", account_endpoint="ba1.eastus.batch.azure.com")
        with patch("infrastructure.factory.BatchServiceRepository.for_account") as for_account:
            RepositoryFactory.create_batch_service_repository(account, "key")
        for_account.assert_called_once_with(
            account_endpoint="ba1.eastus.batch.azure.com",
            account_name="ba1",
            account_key="key",
        )
