"""
Batch Account Configuration.

Provides configuration for:
    - Target region and resource group
    - Batch account name and its auto-storage account
    - Nested application / application package
    - Optional key rotation and explicit account deletion

Exports:
    AccountConfig: Pydantic account configuration model
"""

import os
from pydantic import BaseModel, Field, field_validator

from .defaults import AzureDefaults, AccountDefaults
from .naming import generate_resource_name, is_valid_account_name
from .env_validation import env_flag


class AccountConfig(BaseModel):
    """
    Batch account provisioning configuration.

    Names not supplied through the environment are generated per run.
    """

    region: str = Field(
        default=AzureDefaults.REGION,
        description="Azure region for every resource the workflow creates"
    )

    resource_group: str = Field(
        default_factory=lambda: generate_resource_name(AzureDefaults.RESOURCE_GROUP_PREFIX),
        description="Resource group holding the account and its storage"
    )

    account_name: str = Field(
        default_factory=lambda: generate_resource_name(AzureDefaults.BATCH_ACCOUNT_PREFIX),
        description="Batch account name (reused when it already exists)"
    )

    storage_account_name: str = Field(
        default_factory=lambda: generate_resource_name(AzureDefaults.STORAGE_ACCOUNT_PREFIX),
        description="Auto-storage account linked to the Batch account"
    )

    storage_sku: str = Field(default=AccountDefaults.STORAGE_SKU)
    storage_kind: str = Field(default=AccountDefaults.STORAGE_KIND)

    application_name: str = Field(default=AccountDefaults.APPLICATION_NAME)
    application_display_name: str = Field(default=AccountDefaults.APPLICATION_DISPLAY_NAME)
    updated_application_display_name: str = Field(default=AccountDefaults.UPDATED_APPLICATION_DISPLAY_NAME)
    application_package_version: str = Field(default=AccountDefaults.APPLICATION_PACKAGE_VERSION)

    rotate_keys: bool = Field(
        default=AccountDefaults.ROTATE_KEYS,
        description="Regenerate Batch and storage keys after provisioning"
    )

    delete_account: bool = Field(
        default=AccountDefaults.DELETE_ACCOUNT,
        description="Delete packages, applications and the account during cleanup"
    )

    @field_validator('account_name', 'storage_account_name')
    @classmethod
    def validate_account_name(cls, v: str) -> str:
        """Batch and Storage account names: 3-24 lowercase letters and digits."""
        if not is_valid_account_name(v):
            raise ValueError(
                f"'{v}' is not a valid account name (3-24 lowercase letters and digits)"
            )
        return v

    @field_validator('region')
    @classmethod
    def normalize_region(cls, v: str) -> str:
        """'East US' and 'eastus' name the same region."""
        return v.replace(" ", "").lower()

    def debug_dict(self) -> dict:
        return self.model_dump()

    @classmethod
    def from_environment(cls):
        """Load from environment variables; unset names are generated."""
        overrides = {}
        env_names = {
            'region': "BATCH_REGION",
            'resource_group': "BATCH_RESOURCE_GROUP",
            'account_name': "BATCH_ACCOUNT_NAME",
            'storage_account_name': "BATCH_STORAGE_ACCOUNT_NAME",
            'application_name': "BATCH_APPLICATION_NAME",
            'application_package_version': "BATCH_APPLICATION_PACKAGE_VERSION",
        }
        for field_name, env_name in env_names.items():
            value = os.environ.get(env_name)
            if value:
                overrides[field_name] = value

        return cls(
            rotate_keys=env_flag("BATCH_ROTATE_KEYS", AccountDefaults.ROTATE_KEYS),
            delete_account=env_flag("BATCH_DELETE_ACCOUNT", AccountDefaults.DELETE_ACCOUNT),
            **overrides
        )
