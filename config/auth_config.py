"""
Azure Authentication Configuration.

The workflow authenticates with a service principal described by a
credential file whose path is held in AZURE_AUTH_LOCATION. Two file
formats are accepted:

    JSON (az ad sp create-for-rbac --sdk-auth):
        {"clientId": ..., "clientSecret": ..., "tenantId": ...,
         "subscriptionId": ..., "activeDirectoryEndpointUrl": ...,
         "resourceManagerEndpointUrl": ...}

    Properties (older management SDK samples):
        subscription=...
        client=...
        key=...
        tenant=...
        managementURI=...
        baseURL=...
        authURL=...

When AZURE_AUTH_LOCATION is not set, DefaultAzureCredential is used and the
subscription comes from AZURE_SUBSCRIPTION_ID.

Exports:
    AzureCredentials: Parsed service principal credentials
    AuthConfig: Pydantic auth configuration model
    parse_credential_text: Parse credential file contents (JSON or properties)
"""

import json
import os
from typing import Optional, Dict
from pydantic import BaseModel, Field, ValidationError

from exceptions import ConfigurationError


# Properties-format keys mapped to AzureCredentials fields
_PROPERTIES_KEYS = {
    'subscription': 'subscription_id',
    'client': 'client_id',
    'key': 'client_secret',
    'tenant': 'tenant_id',
    'authURL': 'authority_host',
    'managementURI': 'management_url',
    'baseURL': 'resource_manager_url',
}

# JSON-format keys mapped to AzureCredentials fields
_JSON_KEYS = {
    'subscriptionId': 'subscription_id',
    'clientId': 'client_id',
    'clientSecret': 'client_secret',
    'tenantId': 'tenant_id',
    'activeDirectoryEndpointUrl': 'authority_host',
    'managementEndpointUrl': 'management_url',
    'resourceManagerEndpointUrl': 'resource_manager_url',
}


class AzureCredentials(BaseModel):
    """Service principal credentials read from the auth file."""

    client_id: str = Field(..., min_length=1)
    client_secret: str = Field(..., min_length=1, repr=False)
    tenant_id: str = Field(..., min_length=1)
    subscription_id: str = Field(..., min_length=1)
    authority_host: Optional[str] = None
    management_url: Optional[str] = None
    resource_manager_url: Optional[str] = None

    def debug_dict(self) -> dict:
        """Credential summary with the secret masked."""
        return {
            'client_id': self.client_id,
            'client_secret': '***MASKED***',
            'tenant_id': self.tenant_id,
            'subscription_id': self.subscription_id,
            'authority_host': self.authority_host,
            'resource_manager_url': self.resource_manager_url,
        }


def _parse_properties(text: str) -> Dict[str, str]:
    values = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith('#'):
            continue
        if '=' not in line:
            continue
        key, value = line.split('=', 1)
        field_name = _PROPERTIES_KEYS.get(key.strip())
        if field_name:
            # Properties files escape colons in URLs (https\://...)
            values[field_name] = value.strip().replace('\\:', ':')
    return values


def parse_credential_text(text: str, source: str = "<credentials>") -> AzureCredentials:
    """
    Parse credential file contents in either supported format.

    Args:
        text: File contents
        source: File name used in error messages

    Returns:
        AzureCredentials

    Raises:
        ConfigurationError: If the contents are not a complete credential set
    """
    stripped = text.strip()
    if not stripped:
        raise ConfigurationError(f"Credential file {source} is empty")

    if stripped.startswith('{'):
        try:
            raw = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Credential file {source} is not valid JSON: {e}")
        values = {
            field_name: raw[key]
            for key, field_name in _JSON_KEYS.items()
            if raw.get(key)
        }
    else:
        values = _parse_properties(stripped)

    try:
        return AzureCredentials(**values)
    except ValidationError as e:
        missing = sorted(
            str(err['loc'][0]) for err in e.errors() if err.get('loc')
        )
        raise ConfigurationError(
            f"Credential file {source} is incomplete; missing or empty: {', '.join(missing)}"
        )


class AuthConfig(BaseModel):
    """
    Authentication configuration.

    Either auth_location (service principal file) or subscription_id
    (DefaultAzureCredential) must be provided.
    """

    auth_location: Optional[str] = Field(
        default=None,
        description="Path to the credential file (AZURE_AUTH_LOCATION)"
    )

    subscription_id: Optional[str] = Field(
        default=None,
        description="Subscription used with DefaultAzureCredential (AZURE_SUBSCRIPTION_ID)"
    )

    @property
    def uses_auth_file(self) -> bool:
        return bool(self.auth_location)

    def load_credentials(self) -> AzureCredentials:
        """
        Read and parse the credential file.

        Raises:
            ConfigurationError: If no file is configured or it cannot be read
        """
        if not self.auth_location:
            raise ConfigurationError(
                "AZURE_AUTH_LOCATION not set. "
                "Point it at a service principal credential file."
            )
        if not os.path.isfile(self.auth_location):
            raise ConfigurationError(
                f"Credential file not found: {self.auth_location}"
            )
        with open(self.auth_location, encoding='utf-8') as handle:
            text = handle.read()
        return parse_credential_text(text, source=self.auth_location)

    def debug_dict(self) -> dict:
        return {
            'auth_location': self.auth_location,
            'subscription_id': self.subscription_id,
            'mode': 'auth_file' if self.uses_auth_file else 'default_credential',
        }

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            auth_location=os.environ.get("AZURE_AUTH_LOCATION") or None,
            subscription_id=os.environ.get("AZURE_SUBSCRIPTION_ID") or None,
        )
