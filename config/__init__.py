"""
Configuration Package - Domain-Specific Configuration Modules

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Main config (composes domain configs)
    ├── auth_config.py           # Credential file / subscription
    ├── account_config.py        # Region, resource group, Batch account
    ├── batch_config.py          # Pool, job, tasks, cleanup scope
    ├── env_validation.py        # Startup validation of env vars
    ├── naming.py                # Generated resource names
    └── defaults.py              # Default values

Usage:
    from config import get_config
    config = get_config()
    pool_id = config.pool.pool_id

    from config import debug_config
    info = debug_config()  # Secrets masked
"""

from typing import Optional

from .auth_config import AuthConfig, AzureCredentials, parse_credential_text
from .account_config import AccountConfig
from .batch_config import PoolConfig, JobConfig, CleanupScope
from .naming import generate_resource_name, is_valid_account_name
from .app_config import AppConfig


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Generated resource names are fixed for the life of the process, so
    every component of one run agrees on them.
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration (tests and repeated runs)."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging.

    The credential file contents are never read here; only its path is shown.
    """
    try:
        config = get_config()
        return {
            'auth': config.auth.debug_dict(),
            'account': config.account.debug_dict(),
            'pool': config.pool.model_dump(),
            'job': config.job.model_dump(mode='json'),
            'debug_mode': config.debug_mode,
            'log_level': config.log_level,
            'effective_log_level': config.effective_log_level,
        }
    except Exception as e:
        return {'error': f'Configuration validation failed: {e}'}


__all__ = [
    'AppConfig',
    'get_config',
    'reset_config',
    'debug_config',
    'AuthConfig',
    'AzureCredentials',
    'parse_credential_text',
    'AccountConfig',
    'PoolConfig',
    'JobConfig',
    'CleanupScope',
    'generate_resource_name',
    'is_valid_account_name',
]
