"""
Azure Batch Service Repository.

Data-plane access to one Batch account through azure-batch: pools, jobs
and tasks. Authenticated with the account's shared key.

Key Features:
    - Pool existence check, creation, allocation state
    - Job creation, listing, deletion
    - Task collection submission (max 100 tasks per request)
    - Single-page task listing with field selection

Exports:
    BatchServiceRepository
    TaskPage: one fetched page of tasks
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

import azure.batch.models as batchmodels
from azure.batch import BatchServiceClient
from azure.batch.batch_auth import SharedKeyCredentials
from azure.batch.custom.custom_errors import CreateTasksErrorException

from config.defaults import JobDefaults
from core.logic import state_label
from exceptions import ContractViolationError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "BatchServiceRepository")


def _accepted(task_result) -> bool:
    if state_label(task_result.status) == 'success':
        return True
    return getattr(getattr(task_result, 'error', None), 'code', None) == "TaskExists"


@dataclass
class TaskPage:
    """One page of tasks returned by the task list API."""
    tasks: List[Any] = field(default_factory=list)
    next_link: Optional[str] = None

    @property
    def has_next_page(self) -> bool:
        return bool(self.next_link)


class BatchServiceRepository:
    """
    Batch data-plane operations.

    Args:
        client: azure.batch.BatchServiceClient

    Example:
        repo = BatchServiceRepository.for_account(endpoint, name, key)
        if not repo.pool_exists("pool1"):
            repo.add_pool(pool_config)
    """

    def __init__(self, client):
        self.client = client

    @classmethod
    def for_account(cls, account_endpoint: str, account_name: str, account_key: str) -> 'BatchServiceRepository':
        """
        Open a data-plane client for an account.

        account_endpoint is the management-plane value without a scheme,
        e.g. 'mybatch.eastus.batch.azure.com'.
        """
        batch_url = account_endpoint if account_endpoint.startswith("https://") else f"https://{account_endpoint}"
        credentials = SharedKeyCredentials(account_name, account_key)
        logger.info(f"🔌 Created client with {batch_url}")
        return cls(BatchServiceClient(credentials, batch_url=batch_url))

    # ========================================================================
    # Pools
    # ========================================================================

    def pool_exists(self, pool_id: str) -> bool:
        return bool(self.client.pool.exists(pool_id))

    def add_pool(self, pool_config) -> None:
        """
        Create a fixed-size pool from a PoolConfig.

        Uses a marketplace image on a virtual machine configuration.
        """
        image_reference = batchmodels.ImageReference(
            publisher=pool_config.image_publisher,
            offer=pool_config.image_offer,
            sku=pool_config.image_sku,
            version=pool_config.image_version
        )
        pool = batchmodels.PoolAddParameter(
            id=pool_config.pool_id,
            vm_size=pool_config.vm_size,
            target_dedicated_nodes=pool_config.target_dedicated_nodes,
            virtual_machine_configuration=batchmodels.VirtualMachineConfiguration(
                image_reference=image_reference,
                node_agent_sku_id=pool_config.node_agent_sku_id
            )
        )
        logger.info(
            f"🖥️ Creating pool {pool_config.pool_id}",
            extra={'custom_dimensions': {
                'pool_id': pool_config.pool_id,
                'vm_size': pool_config.vm_size,
                'target_dedicated_nodes': pool_config.target_dedicated_nodes,
            }}
        )
        self.client.pool.add(pool)

    def get_allocation_state(self, pool_id: str) -> str:
        """Current allocation state label ('steady', 'resizing', 'stopping')."""
        pool = self.client.pool.get(pool_id)
        return state_label(pool.allocation_state)

    # ========================================================================
    # Jobs
    # ========================================================================

    def add_job(self, job_id: str, pool_id: str) -> None:
        logger.info(f"📋 Creating job {job_id} on pool {pool_id}")
        job = batchmodels.JobAddParameter(
            id=job_id,
            pool_info=batchmodels.PoolInformation(pool_id=pool_id)
        )
        self.client.job.add(job)

    def list_jobs(self) -> List:
        return list(self.client.job.list())

    def delete_job(self, job_id: str) -> None:
        logger.info(f"🗑️ Deleting job {job_id}")
        self.client.job.delete(job_id)

    # ========================================================================
    # Tasks
    # ========================================================================

    @staticmethod
    def build_task(task_id: str, command_line: str):
        return batchmodels.TaskAddParameter(id=task_id, command_line=command_line)

    def add_task_collection(self, job_id: str, tasks: List) -> List[str]:
        """
        Submit up to 100 tasks in one request.

        The SDK's add_collection retries server errors itself and raises
        CreateTasksErrorException once any task is rejected with a client
        error. Those rejections are returned, not raised. A task that
        already exists counts as accepted.

        Returns:
            IDs of tasks the service rejected (empty when all were accepted)

        Raises:
            ContractViolationError: If more than 100 tasks are passed
            CreateTasksErrorException: If the request itself failed and the
                state of the tasks is unknown
        """
        if len(tasks) > JobDefaults.MAX_TASKS_PER_REQUEST:
            raise ContractViolationError(
                f"add_task_collection accepts at most {JobDefaults.MAX_TASKS_PER_REQUEST} tasks, "
                f"got {len(tasks)}"
            )

        try:
            result = self.client.task.add_collection(job_id, tasks)
            task_results = getattr(result, 'value', None) or []
        except CreateTasksErrorException as e:
            if e.errors:
                logger.error(
                    f"❌ Task collection request for job {job_id} failed: {e.errors[0]}",
                    extra={
                        'error_source': 'infrastructure',
                        'error_type': type(e).__name__,
                        'pending_tasks': len(e.pending_tasks or []),
                    }
                )
                raise
            task_results = e.failure_tasks or []

        failed = []
        for task_result in task_results:
            if _accepted(task_result):
                continue
            failed.append(task_result.task_id)
            error = getattr(task_result, 'error', None)
            logger.warning(
                f"⚠️ Task {task_result.task_id} rejected: "
                f"{getattr(error, 'message', None) or task_result.status}"
            )
        return failed

    def list_task_page(self, job_id: str, select: str = "id,state") -> TaskPage:
        """
        Fetch a single page of the job's tasks.

        Only the fields named in `select` are populated on the returned tasks.
        """
        options = batchmodels.TaskListOptions(select=select)
        paged = self.client.task.list(job_id, task_list_options=options)
        try:
            tasks = list(paged.advance_page())
        except StopIteration:
            tasks = []
        return TaskPage(tasks=tasks, next_link=getattr(paged, 'next_link', None))
