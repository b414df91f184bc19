"""
Core Data Models Package.

Contains pure data structures without business logic.
All business logic is in the core.logic package.

Exports:
    WorkflowPhase, AllocationStateLabel, TaskStateLabel: Enums
    QuotaCheck, PoolWaitResult, SubmissionResult, TaskTally,
    MonitorResult, WorkflowResult: Result types
"""

from .enums import (
    WorkflowPhase,
    AllocationStateLabel,
    TaskStateLabel
)

from .results import (
    QuotaCheck,
    PoolWaitResult,
    SubmissionResult,
    TaskTally,
    MonitorResult,
    WorkflowResult
)

__all__ = [
    'WorkflowPhase',
    'AllocationStateLabel',
    'TaskStateLabel',
    'QuotaCheck',
    'PoolWaitResult',
    'SubmissionResult',
    'TaskTally',
    'MonitorResult',
    'WorkflowResult'
]
