"""
Pure Enumeration Types for the Batch workflow.

No business logic - pure type definitions only.

Exports:
    WorkflowPhase: Phase the workflow reached
    AllocationStateLabel: Pool allocation states reported by the Batch service
    TaskStateLabel: Task states reported by the Batch service
"""

from enum import Enum


class WorkflowPhase(str, Enum):
    """
    Sequential phases of one workflow run.

    Phase order:
    - QUOTA_CHECK -> ACCOUNT_PROVISIONING -> POOL_PROVISIONING
      -> JOB_SUBMISSION -> MONITORING -> COMPLETED
    """

    QUOTA_CHECK = "quota_check"
    ACCOUNT_PROVISIONING = "account_provisioning"
    POOL_PROVISIONING = "pool_provisioning"
    JOB_SUBMISSION = "job_submission"
    MONITORING = "monitoring"
    COMPLETED = "completed"


class AllocationStateLabel(str, Enum):
    """Pool allocation states. STEADY means the requested nodes are allocated."""

    STEADY = "steady"
    RESIZING = "resizing"
    STOPPING = "stopping"


class TaskStateLabel(str, Enum):
    """Task states. COMPLETED is the only terminal state."""

    ACTIVE = "active"
    PREPARING = "preparing"
    RUNNING = "running"
    COMPLETED = "completed"
    UNKNOWN = "unknown"
