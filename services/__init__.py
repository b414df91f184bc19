"""
Services Package - Batch Workflow Steps.

Each service wraps one stage of the workflow on top of the repositories:

    BatchAccountService: quota check, account acquisition and management
    BatchPoolService: pool acquisition and steady-state wait
    BatchJobService: job creation, task submission and monitoring
"""

from .account_service import AccountHandle, BatchAccountService
from .pool_service import BatchPoolService
from .job_service import BatchJobService

__all__ = [
    'AccountHandle',
    'BatchAccountService',
    'BatchPoolService',
    'BatchJobService',
]
