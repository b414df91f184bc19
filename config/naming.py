"""
Azure resource name helpers.

Batch and Storage account names must be 3-24 characters, lowercase letters
and digits only. Pool and job IDs are more permissive but the same generator
is used for them so every resource created by one run shares a style.

Exports:
    generate_resource_name: prefix + random hex suffix
    is_valid_account_name: Batch/Storage account naming rule check
"""

import re
import uuid

from .defaults import AzureDefaults


_ACCOUNT_NAME_PATTERN = re.compile(r"^[a-z0-9]{3,24}$")


def generate_resource_name(prefix: str, max_length: int = AzureDefaults.MAX_NAME_LENGTH) -> str:
    """
    Generate a unique resource name such as 'ba3f9c2e71d0a4'.

    Args:
        prefix: Lowercase alphanumeric prefix
        max_length: Maximum total length (default 24)

    Returns:
        Name of exactly min(max_length, len(prefix) + 12) characters
    """
    if len(prefix) >= max_length:
        raise ValueError(f"Prefix '{prefix}' leaves no room for a suffix within {max_length} chars")
    suffix_length = min(12, max_length - len(prefix))
    return f"{prefix}{uuid.uuid4().hex[:suffix_length]}"


def is_valid_account_name(name: str) -> bool:
    """Check Batch/Storage account naming rules."""
    return bool(_ACCOUNT_NAME_PATTERN.match(name or ""))
