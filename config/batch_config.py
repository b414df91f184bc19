"""
Batch Pool and Job Configuration.

Provides configuration for:
    - Pool shape (VM size, node count, marketplace image)
    - Pool allocation wait (timeout, poll interval, fail-on-timeout)
    - Job task submission (count, command line, chunk size)
    - Task monitoring loop (iterations, interval, early stop)
    - Cleanup scope

Exports:
    CleanupScope: What the guaranteed cleanup step deletes
    PoolConfig: Pydantic pool configuration model
    JobConfig: Pydantic job configuration model
"""

import os
from enum import Enum
from pydantic import BaseModel, Field

from .defaults import AzureDefaults, PoolDefaults, JobDefaults
from .naming import generate_resource_name
from .env_validation import env_flag


class CleanupScope(str, Enum):
    """
    What the cleanup step deletes.

    RESOURCE_GROUP: the whole resource group (account, storage, pools, jobs)
    JOB: only the job created by the run
    NONE: nothing
    """
    RESOURCE_GROUP = "resource_group"
    JOB = "job"
    NONE = "none"


# ============================================================================
# POOL CONFIGURATION
# ============================================================================

class PoolConfig(BaseModel):
    """
    Compute pool configuration.

    The pool is fixed-size: target_dedicated_nodes nodes of vm_size running
    the configured marketplace image.
    """

    pool_id: str = Field(
        default_factory=lambda: generate_resource_name(AzureDefaults.POOL_PREFIX),
        min_length=1,
        max_length=64
    )

    vm_size: str = Field(default=PoolDefaults.VM_SIZE)
    target_dedicated_nodes: int = Field(default=PoolDefaults.TARGET_DEDICATED_NODES, ge=0)

    image_publisher: str = Field(default=PoolDefaults.IMAGE_PUBLISHER)
    image_offer: str = Field(default=PoolDefaults.IMAGE_OFFER)
    image_sku: str = Field(default=PoolDefaults.IMAGE_SKU)
    image_version: str = Field(default=PoolDefaults.IMAGE_VERSION)
    node_agent_sku_id: str = Field(default=PoolDefaults.NODE_AGENT_SKU_ID)

    steady_timeout_seconds: float = Field(
        default=PoolDefaults.STEADY_TIMEOUT_SECONDS,
        gt=0,
        description="Maximum time to wait for the steady allocation state"
    )

    poll_interval_seconds: float = Field(
        default=PoolDefaults.POLL_INTERVAL_SECONDS,
        ge=0,
        description="Sleep between allocation state checks"
    )

    fail_on_timeout: bool = Field(
        default=PoolDefaults.FAIL_ON_TIMEOUT,
        description="Treat a pool that never reached steady state as a workflow failure"
    )

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        overrides = {}
        pool_id = os.environ.get("BATCH_POOL_ID")
        if pool_id:
            overrides['pool_id'] = pool_id

        return cls(
            vm_size=os.environ.get("BATCH_POOL_VM_SIZE", PoolDefaults.VM_SIZE),
            target_dedicated_nodes=int(os.environ.get(
                "BATCH_POOL_DEDICATED_NODES", str(PoolDefaults.TARGET_DEDICATED_NODES))),
            image_publisher=os.environ.get("BATCH_POOL_IMAGE_PUBLISHER", PoolDefaults.IMAGE_PUBLISHER),
            image_offer=os.environ.get("BATCH_POOL_IMAGE_OFFER", PoolDefaults.IMAGE_OFFER),
            image_sku=os.environ.get("BATCH_POOL_IMAGE_SKU", PoolDefaults.IMAGE_SKU),
            image_version=os.environ.get("BATCH_POOL_IMAGE_VERSION", PoolDefaults.IMAGE_VERSION),
            node_agent_sku_id=os.environ.get("BATCH_POOL_NODE_AGENT_SKU_ID", PoolDefaults.NODE_AGENT_SKU_ID),
            steady_timeout_seconds=float(os.environ.get(
                "BATCH_POOL_STEADY_TIMEOUT_SECONDS", str(PoolDefaults.STEADY_TIMEOUT_SECONDS))),
            poll_interval_seconds=float(os.environ.get(
                "BATCH_POOL_POLL_INTERVAL_SECONDS", str(PoolDefaults.POLL_INTERVAL_SECONDS))),
            fail_on_timeout=env_flag("BATCH_FAIL_ON_POOL_TIMEOUT", PoolDefaults.FAIL_ON_TIMEOUT),
            **overrides
        )


# ============================================================================
# JOB CONFIGURATION
# ============================================================================

class JobConfig(BaseModel):
    """
    Job, task submission and monitoring configuration.

    submit_chunk_size is capped at 100, the Batch service limit for a single
    add_collection request.
    """

    job_id: str = Field(
        default_factory=lambda: generate_resource_name(AzureDefaults.JOB_PREFIX),
        min_length=1,
        max_length=64
    )

    task_count: int = Field(default=JobDefaults.TASK_COUNT, ge=0)
    task_command_line: str = Field(default=JobDefaults.TASK_COMMAND_LINE, min_length=1)

    submit_chunk_size: int = Field(
        default=JobDefaults.SUBMIT_CHUNK_SIZE,
        ge=1,
        le=JobDefaults.MAX_TASKS_PER_REQUEST
    )

    monitor_iterations: int = Field(default=JobDefaults.MONITOR_ITERATIONS, ge=0)
    monitor_interval_seconds: float = Field(default=JobDefaults.MONITOR_INTERVAL_SECONDS, ge=0)

    stop_when_complete: bool = Field(
        default=JobDefaults.STOP_WHEN_COMPLETE,
        description="End monitoring early once every task is completed"
    )

    cleanup_scope: CleanupScope = Field(default=CleanupScope(JobDefaults.CLEANUP_SCOPE))

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        overrides = {}
        job_id = os.environ.get("BATCH_JOB_ID")
        if job_id:
            overrides['job_id'] = job_id

        return cls(
            task_count=int(os.environ.get("BATCH_TASK_COUNT", str(JobDefaults.TASK_COUNT))),
            task_command_line=os.environ.get("BATCH_TASK_COMMAND_LINE", JobDefaults.TASK_COMMAND_LINE),
            submit_chunk_size=int(os.environ.get(
                "BATCH_SUBMIT_CHUNK_SIZE", str(JobDefaults.SUBMIT_CHUNK_SIZE))),
            monitor_iterations=int(os.environ.get(
                "BATCH_MONITOR_ITERATIONS", str(JobDefaults.MONITOR_ITERATIONS))),
            monitor_interval_seconds=float(os.environ.get(
                "BATCH_MONITOR_INTERVAL_SECONDS", str(JobDefaults.MONITOR_INTERVAL_SECONDS))),
            stop_when_complete=env_flag("BATCH_MONITOR_STOP_WHEN_COMPLETE", JobDefaults.STOP_WHEN_COMPLETE),
            cleanup_scope=CleanupScope(os.environ.get("BATCH_CLEANUP_SCOPE", JobDefaults.CLEANUP_SCOPE)),
            **overrides
        )
