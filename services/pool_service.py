"""
Batch Pool Service.

Idempotent pool acquisition and the blocking wait for the steady
allocation state.

Exports:
    BatchPoolService
"""

import time
from typing import Callable

from config.batch_config import PoolConfig
from core.logic import wait_until
from core.models import AllocationStateLabel, PoolWaitResult
from exceptions import PoolAllocationTimeoutError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "BatchPoolService")


class BatchPoolService:
    """
    Pool workflow steps.

    Args:
        batch_repo: infrastructure.BatchServiceRepository
        config: PoolConfig
        sleep: Sleep function (injectable for tests)
        clock: Monotonic clock (injectable for tests)
    """

    def __init__(self, batch_repo, config: PoolConfig,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic):
        self.batch_repo = batch_repo
        self.config = config
        self.sleep = sleep
        self.clock = clock

    def acquire_pool(self) -> bool:
        """
        Reuse the pool if it exists, otherwise create it.

        Returns:
            True if the pool was created by this call
        """
        pool_id = self.config.pool_id
        if self.batch_repo.pool_exists(pool_id):
            logger.info(f"♻️ Reusing pool {pool_id}")
            return False

        self.batch_repo.add_pool(self.config)
        return True

    def wait_for_steady(self) -> PoolWaitResult:
        """
        Poll the allocation state until it is steady or the timeout elapses.

        A failing status call ends the wait with steady=False and the error
        recorded; it is not raised.
        """
        pool_id = self.config.pool_id
        interval = self.config.poll_interval_seconds

        def on_wait(state, elapsed):
            logger.info(f"⏳ wait {interval:g} seconds for pool steady... (state: {state})")

        result = PoolWaitResult(pool_id=pool_id)
        try:
            outcome = wait_until(
                check=lambda: self.batch_repo.get_allocation_state(pool_id),
                is_done=lambda state: state == AllocationStateLabel.STEADY.value,
                timeout_seconds=self.config.steady_timeout_seconds,
                interval_seconds=interval,
                sleep=self.sleep,
                clock=self.clock,
                on_wait=on_wait
            )
            result = PoolWaitResult(
                pool_id=pool_id,
                steady=outcome.reached,
                elapsed_seconds=max(outcome.elapsed_seconds, 0.0),
                polls=outcome.polls,
                last_state=outcome.last_value
            )
        except Exception as e:
            logger.error("❌ Pool not reached steady state properly", exc_info=True)
            result = PoolWaitResult(pool_id=pool_id, error=str(e))

        logger.info(
            f"Pool reached steady? {str(result.steady).lower()}",
            extra={'custom_dimensions': result.model_dump()}
        )
        return result

    def provision(self) -> PoolWaitResult:
        """
        Acquire the pool and wait for it.

        Raises:
            PoolAllocationTimeoutError: If the pool is not steady and
                fail_on_timeout is enabled
        """
        logger.info(f"🖥️ Creating pool {self.config.pool_id}")
        self.acquire_pool()
        result = self.wait_for_steady()

        if not result.steady:
            if self.config.fail_on_timeout:
                raise PoolAllocationTimeoutError(
                    self.config.pool_id,
                    self.config.steady_timeout_seconds,
                    last_state=result.last_state or result.error
                )
            logger.warning(f"⚠️ Continuing with pool {self.config.pool_id} that is not steady")
        else:
            logger.info("✅ Pool created")

        return result
