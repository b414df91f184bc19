"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - AuthConfig (credential file / DefaultAzureCredential)
    - AccountConfig (region, resource group, Batch account, application)
    - PoolConfig (compute pool and allocation wait)
    - JobConfig (tasks, monitoring, cleanup)

Exports:
    AppConfig: Main configuration class

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
"""

import os
from pydantic import BaseModel, Field, field_validator

from .auth_config import AuthConfig
from .account_config import AccountConfig
from .batch_config import PoolConfig, JobConfig
from .defaults import AppDefaults
from .env_validation import env_flag

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppConfig(BaseModel):
    """
    Application configuration - composition of domain configs.
    """

    debug_mode: bool = Field(default=AppDefaults.DEBUG_MODE)
    log_level: str = Field(default=AppDefaults.LOG_LEVEL)

    auth: AuthConfig = Field(default_factory=AuthConfig)
    account: AccountConfig = Field(default_factory=AccountConfig)
    pool: PoolConfig = Field(default_factory=PoolConfig)
    job: JobConfig = Field(default_factory=JobConfig)

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"'{v}' is not a log level (one of {', '.join(_LOG_LEVELS)})")
        return level

    @property
    def effective_log_level(self) -> str:
        """DEBUG_MODE wins over LOG_LEVEL."""
        return "DEBUG" if self.debug_mode else self.log_level

    @classmethod
    def from_environment(cls):
        """Load all configs from environment."""
        return cls(
            debug_mode=env_flag("DEBUG_MODE", AppDefaults.DEBUG_MODE),
            log_level=os.environ.get("LOG_LEVEL", AppDefaults.LOG_LEVEL),
            auth=AuthConfig.from_environment(),
            account=AccountConfig.from_environment(),
            pool=PoolConfig.from_environment(),
            job=JobConfig.from_environment(),
        )
