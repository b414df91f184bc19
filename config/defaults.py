"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - AzureDefaults: region and name prefixes for generated resource names
    - AccountDefaults: Batch account, application and storage settings
    - PoolDefaults: compute pool shape and allocation wait
    - JobDefaults: task count, submission chunking and monitoring loop
    - AppDefaults: logging

Usage:
    from config.defaults import PoolDefaults

    # In Pydantic Field definitions:
    vm_size: str = Field(default=PoolDefaults.VM_SIZE, ...)
"""


# =============================================================================
# AZURE DEFAULTS
# =============================================================================

class AzureDefaults:
    """
    Subscription-level defaults.

    Generated names are prefix + random hex suffix, lowercase and at most
    24 characters so they satisfy both Batch and Storage account naming rules.
    """

    REGION = "eastus"
    MAX_NAME_LENGTH = 24

    RESOURCE_GROUP_PREFIX = "rgbatch"
    BATCH_ACCOUNT_PREFIX = "ba"
    STORAGE_ACCOUNT_PREFIX = "sa"
    POOL_PREFIX = "pool"
    JOB_PREFIX = "job"


# =============================================================================
# BATCH ACCOUNT DEFAULTS
# =============================================================================

class AccountDefaults:
    """Batch account, nested application and auto-storage defaults."""

    APPLICATION_NAME = "application"
    APPLICATION_DISPLAY_NAME = "My application display name"
    UPDATED_APPLICATION_DISPLAY_NAME = "New application display name"
    APPLICATION_PACKAGE_VERSION = "app_package"

    STORAGE_SKU = "Standard_LRS"
    STORAGE_KIND = "StorageV2"

    ROTATE_KEYS = False
    DELETE_ACCOUNT = False


# =============================================================================
# POOL DEFAULTS
# =============================================================================

class PoolDefaults:
    """Compute pool defaults (Ubuntu marketplace image, 3 dedicated nodes)."""

    VM_SIZE = "STANDARD_D1_V2"
    TARGET_DEDICATED_NODES = 3

    IMAGE_PUBLISHER = "Canonical"
    IMAGE_OFFER = "UbuntuServer"
    IMAGE_SKU = "18.04-LTS"
    IMAGE_VERSION = "latest"
    NODE_AGENT_SKU_ID = "batch.node.ubuntu 18.04"

    STEADY_TIMEOUT_SECONDS = 300
    POLL_INTERVAL_SECONDS = 30
    FAIL_ON_TIMEOUT = True


# =============================================================================
# JOB / TASK DEFAULTS
# =============================================================================

class JobDefaults:
    """Job, task submission and monitoring defaults."""

    TASK_COUNT = 1500
    TASK_COMMAND_LINE = "sleep 30"

    # Batch service rejects add_collection calls with more than 100 tasks
    MAX_TASKS_PER_REQUEST = 100
    SUBMIT_CHUNK_SIZE = 100

    MONITOR_ITERATIONS = 300
    MONITOR_INTERVAL_SECONDS = 10
    STOP_WHEN_COMPLETE = True

    CLEANUP_SCOPE = "resource_group"


# =============================================================================
# APPLICATION DEFAULTS
# =============================================================================

class AppDefaults:
    """Process-wide defaults."""

    LOG_LEVEL = "INFO"
    DEBUG_MODE = False
