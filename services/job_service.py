"""
Batch Job Service.

Job creation, chunked task submission and the fixed-iteration monitoring
loop that tallies task states from one page of the task listing.

Exports:
    BatchJobService
"""

import time
from typing import Callable, List

from config.batch_config import JobConfig
from core.logic import build_task_tally, chunk_count, chunked
from core.models import MonitorResult, SubmissionResult
from exceptions import TaskSubmissionError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "BatchJobService")


class BatchJobService:
    """
    Job workflow steps.

    Args:
        batch_repo: infrastructure.BatchServiceRepository
        config: JobConfig
        sleep: Sleep function (injectable for tests)
    """

    def __init__(self, batch_repo, config: JobConfig, sleep: Callable[[float], None] = time.sleep):
        self.batch_repo = batch_repo
        self.config = config
        self.sleep = sleep

    def create_job(self, pool_id: str) -> None:
        self.batch_repo.add_job(self.config.job_id, pool_id)
        for job in self.batch_repo.list_jobs():
            logger.info(f"Job: {job.url}")

    def build_tasks(self) -> List:
        """One task per index, id '{job_id}-{index}', all with the configured command line."""
        job_id = self.config.job_id
        return [
            self.batch_repo.build_task(f"{job_id}-{index}", self.config.task_command_line)
            for index in range(self.config.task_count)
        ]

    def submit_tasks(self, tasks: List) -> SubmissionResult:
        """
        Submit tasks in chunks of submit_chunk_size, in order.

        Rejected tasks are recorded on the result. A failing request aborts
        the remaining chunks.

        Raises:
            TaskSubmissionError: If a chunk request raises
        """
        job_id = self.config.job_id
        size = self.config.submit_chunk_size
        total_chunks = chunk_count(len(tasks), size)
        result = SubmissionResult(job_id=job_id, requested=len(tasks))

        logger.info(f"📤 Submitting {len(tasks)} tasks to {job_id} in {total_chunks} chunks")

        for index, chunk in enumerate(chunked(tasks, size)):
            try:
                failed = self.batch_repo.add_task_collection(job_id, chunk)
            except Exception as e:
                logger.error(
                    f"❌ Task chunk {index + 1}/{total_chunks} failed for job {job_id}: {e}",
                    extra={
                        'error_source': 'service',
                        'error_type': type(e).__name__,
                        'submitted_so_far': result.submitted,
                    }
                )
                raise TaskSubmissionError(
                    f"Chunk {index + 1}/{total_chunks} of job {job_id} failed after "
                    f"{result.submitted} tasks were submitted: {e}"
                ) from e

            result.chunk_count += 1
            result.submitted += len(chunk) - len(failed)
            result.failed_task_ids.extend(failed)
            logger.debug(f"Chunk {index + 1}/{total_chunks} submitted ({len(chunk)} tasks)")

        if result.failed_task_ids:
            logger.warning(f"⚠️ {len(result.failed_task_ids)} tasks were rejected for job {job_id}")
        else:
            logger.info(f"✅ Submitted {result.submitted} tasks in {result.chunk_count} chunks")
        return result

    def monitor(self) -> MonitorResult:
        """
        Sleep, fetch one task page and log its per-state tally, a fixed
        number of times.

        With stop_when_complete, the loop ends early once the page holds
        only completed tasks and there is no next page.
        """
        job_id = self.config.job_id
        result = MonitorResult(job_id=job_id)

        for _ in range(self.config.monitor_iterations):
            self.sleep(self.config.monitor_interval_seconds)

            page = self.batch_repo.list_task_page(job_id, select="id,state")
            tally = build_task_tally(page.tasks, page.has_next_page)
            result.iterations += 1
            result.last_tally = tally

            logger.info(
                f"Tasks remaining: {tally.page_size} hasNextPage: {str(tally.has_next_page).lower()}",
                extra={'custom_dimensions': {'job_id': job_id, 'task_counts': tally.counts}}
            )
            for state, count in tally.counts.items():
                logger.info(f"{state}: {count}")

            if self.config.stop_when_complete and tally.all_completed:
                logger.info(f"✅ All tasks of {job_id} completed")
                result.stopped_early = True
                break

        return result

    def delete_job(self) -> None:
        self.batch_repo.delete_job(self.config.job_id)
