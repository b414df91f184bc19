"""
Azure Batch Account Management Workflow - Entry Point.

Runs the end-to-end walkthrough against a subscription:

    1. Check the regional Batch account quota
    2. Reuse or create the Batch account (resource group, auto-storage,
       application and application package)
    3. Update the application, list accounts, optionally rotate keys
    4. Reuse or create the pool and wait for a steady allocation state
    5. Create the job and submit its tasks in chunks
    6. Poll one page of tasks a fixed number of times, logging a
       per-state tally
    7. Clean up in all cases (resource group, job only, or nothing)

Usage:
    python manage_batch_account.py

    Exit code 0 when the run completed, 1 otherwise.

Exports:
    run_workflow: Run once and return a WorkflowResult
    run_sample: Run once and return True/False
    main: Configure from the environment and run
"""

import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional

from config import AppConfig, CleanupScope, get_config
from config.env_validation import log_validation_results
from core.models import WorkflowPhase, WorkflowResult
from infrastructure import RepositoryFactory
from services import AccountHandle, BatchAccountService, BatchJobService, BatchPoolService
from util_logger import LoggerFactory, ComponentType, log_context, log_phase

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "ManageBatchAccount")


@dataclass
class _RunState:
    """What the run has touched so far, for cleanup."""
    account: Optional[AccountHandle] = None
    job_service: Optional[BatchJobService] = None
    job_created: bool = False


def run_workflow(
    repos,
    config: AppConfig,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
    batch_repo_factory: Callable = RepositoryFactory.create_batch_service_repository
) -> WorkflowResult:
    """
    Run the workflow once.

    Any exception from a step is logged with its traceback and ends the run
    with success=False. Cleanup runs exactly once whatever happens; its own
    errors are logged and never change the outcome.

    Args:
        repos: infrastructure.ManagementRepositories
        config: AppConfig
        sleep: Sleep function for pool and task polling
        clock: Monotonic clock for the pool wait
        batch_repo_factory: (account, key) -> BatchServiceRepository
    """
    with log_context(
        resource_group=config.account.resource_group,
        account_name=config.account.account_name,
        pool_id=config.pool.pool_id,
        job_id=config.job.job_id,
        region=config.account.region
    ):
        return _run(repos, config, sleep, clock, batch_repo_factory)


def _run(repos, config: AppConfig, sleep, clock, batch_repo_factory) -> WorkflowResult:
    result = WorkflowResult()
    state = _RunState()
    account_service = BatchAccountService(repos, config.account)

    try:
        with log_phase(logger, WorkflowPhase.QUOTA_CHECK.value, region=config.account.region):
            quota = account_service.check_quota()
        if not quota.should_proceed:
            result.error = "Batch account quota exhausted"
            return result

        result.phase = WorkflowPhase.ACCOUNT_PROVISIONING
        with log_phase(logger, result.phase.value, account_name=config.account.account_name):
            handle = account_service.acquire_account(quota)
            state.account = handle

            account_service.update_application_display_name(handle)
            account_service.list_accounts_in_group(handle.resource_group)
            account = account_service.refresh_account(handle)

            if config.account.rotate_keys:
                account_service.rotate_account_keys(handle)
                account_service.rotate_storage_keys_and_sync(handle)

            account_key = account_service.get_primary_key(handle)
            logger.info(f"Batch account {account.name} endpoint: {account.account_endpoint}")

        batch_repo = batch_repo_factory(account, account_key)

        result.phase = WorkflowPhase.POOL_PROVISIONING
        with log_phase(logger, result.phase.value, pool_id=config.pool.pool_id):
            BatchPoolService(batch_repo, config.pool, sleep=sleep, clock=clock).provision()

        job_service = BatchJobService(batch_repo, config.job, sleep=sleep)
        state.job_service = job_service

        result.phase = WorkflowPhase.JOB_SUBMISSION
        with log_phase(logger, result.phase.value, job_id=config.job.job_id):
            job_service.create_job(config.pool.pool_id)
            state.job_created = True
            job_service.submit_tasks(job_service.build_tasks())

        result.phase = WorkflowPhase.MONITORING
        with log_phase(logger, result.phase.value, job_id=config.job.job_id):
            job_service.monitor()

        result.phase = WorkflowPhase.COMPLETED
        result.success = True
        return result

    except Exception as e:
        logger.error(
            f"❌ Workflow failed during {result.phase.value}: {e}",
            exc_info=True,
            extra={'custom_dimensions': {'phase': result.phase.value, 'error_type': type(e).__name__}}
        )
        result.error = str(e)
        return result

    finally:
        result.cleanup_attempted = True
        result.cleanup_succeeded = cleanup(repos, config, state, account_service)


def cleanup(repos, config: AppConfig, state: _RunState, account_service: BatchAccountService) -> bool:
    """
    Delete what the run created, according to config.job.cleanup_scope.

    Never raises. Returns False if a deletion failed.
    """
    scope = config.job.cleanup_scope
    try:
        if scope == CleanupScope.RESOURCE_GROUP:
            resource_group = config.account.resource_group
            if repos.resource_groups.exists(resource_group):
                repos.resource_groups.delete(resource_group)
            else:
                logger.info("Did not create any resources in Azure. No clean up is necessary")

        elif scope == CleanupScope.JOB:
            if state.job_created and state.job_service is not None:
                state.job_service.delete_job()
            if config.account.delete_account and state.account is not None and state.account.created:
                account_service.delete_account(state.account)

        else:
            logger.info("⏭️ Cleanup disabled, leaving resources in place")

        return True

    except Exception as e:
        logger.error(
            f"❌ Cleanup failed: {e}",
            exc_info=True,
            extra={'error_source': 'cleanup', 'error_type': type(e).__name__}
        )
        return False


def run_sample(repos, config: AppConfig, **kwargs) -> bool:
    """Run the workflow once; True only when every step completed."""
    return run_workflow(repos, config, **kwargs).success


def main() -> bool:
    """Configure from the environment, authenticate and run once."""
    if not log_validation_results(LoggerFactory.create_logger(ComponentType.VALIDATOR, "EnvValidation")):
        return False

    try:
        config = get_config()
        LoggerFactory.set_level(config.effective_log_level)
        repos = RepositoryFactory.create_management_repositories(config.auth)
    except Exception as e:
        logger.error(f"❌ Startup failed: {e}", exc_info=True)
        return False

    logger.info(f"Selected subscription: {repos.subscription_id}")
    return run_sample(repos, config)


def cli() -> None:
    sys.exit(0 if main() else 1)


if __name__ == "__main__":
    cli()
