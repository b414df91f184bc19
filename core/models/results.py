"""
Workflow Result Data Models.

Represents the outcome of each workflow phase.
No business logic - pure data structures.

Exports:
    QuotaCheck: Region quota evaluation
    PoolWaitResult: Outcome of waiting for a steady pool
    SubmissionResult: Outcome of chunked task submission
    TaskTally: Per-state task counts for one fetched page
    MonitorResult: Outcome of the monitoring loop
    WorkflowResult: Overall outcome of run_sample
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .enums import WorkflowPhase, TaskStateLabel


class QuotaCheck(BaseModel):
    """
    Result of comparing existing Batch accounts in a region with the quota.

    Decision logic lives in core.logic.calculations.evaluate_quota.
    """

    region: str = Field(..., description="Normalized region name")
    allowed: int = Field(..., ge=0, description="Account quota for the region")
    existing_in_region: int = Field(..., ge=0, description="Accounts already in the region")
    reusable_account: Optional[str] = Field(
        default=None,
        description="Name of an existing account with the desired name, if any"
    )

    @property
    def can_create(self) -> bool:
        """A new, distinct account fits under the quota."""
        return self.existing_in_region < self.allowed

    @property
    def should_proceed(self) -> bool:
        """Reuse always proceeds; creation proceeds only under the quota."""
        return self.reusable_account is not None or self.can_create


class PoolWaitResult(BaseModel):
    """Outcome of waiting for a pool to reach the steady allocation state."""

    pool_id: str
    steady: bool = False
    elapsed_seconds: float = Field(default=0.0, ge=0)
    polls: int = Field(default=0, ge=0)
    last_state: Optional[str] = None
    error: Optional[str] = Field(default=None, description="Status check failure that ended the wait early")

    @property
    def timed_out(self) -> bool:
        return not self.steady and self.error is None


class SubmissionResult(BaseModel):
    """Outcome of submitting a job's tasks in chunks."""

    job_id: str
    requested: int = Field(..., ge=0)
    submitted: int = Field(default=0, ge=0)
    chunk_count: int = Field(default=0, ge=0)
    failed_task_ids: List[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed_task_ids and self.submitted == self.requested


class TaskTally(BaseModel):
    """
    Task counts by state for one fetched page, in first-seen order.

    Invariant: sum(counts.values()) == page_size.
    """

    counts: Dict[str, int] = Field(default_factory=dict)
    page_size: int = Field(default=0, ge=0)
    has_next_page: bool = False

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def all_completed(self) -> bool:
        """Every task in the page is completed and no further page exists."""
        return (
            self.page_size > 0
            and not self.has_next_page
            and self.counts.get(TaskStateLabel.COMPLETED.value, 0) == self.page_size
        )


class MonitorResult(BaseModel):
    """Outcome of the task monitoring loop."""

    job_id: str
    iterations: int = Field(default=0, ge=0)
    last_tally: Optional[TaskTally] = None
    stopped_early: bool = False

    @property
    def all_completed(self) -> bool:
        return self.last_tally is not None and self.last_tally.all_completed


class WorkflowResult(BaseModel):
    """Overall outcome of one run_sample call."""

    success: bool = False
    phase: WorkflowPhase = WorkflowPhase.QUOTA_CHECK
    error: Optional[str] = None
    cleanup_attempted: bool = False
    cleanup_succeeded: Optional[bool] = None
