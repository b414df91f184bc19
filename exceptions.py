"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Business Logic Failures (expected runtime issues against Azure)

This separation ensures bugs are found quickly while the workflow
still reports a clean failure for expected problems.

"""


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the code.

    Examples:
        - More than 100 tasks passed to a single add_task_collection call
    """
    pass


class BusinessLogicError(Exception):
    """
    Base class for expected runtime business logic failures.

    Subclasses represent specific categories of business failures.
    """
    pass


class QuotaExceededError(BusinessLogicError):
    """
    The subscription cannot hold another Batch account in the region.

    Carries the numbers used for the decision so callers can report them.
    """

    def __init__(self, region: str, existing: int, allowed: int):
        self.region = region
        self.existing = existing
        self.allowed = allowed
        super().__init__(
            f"No more batch accounts can be created at {region} region, "
            f"this region already have {existing} batch accounts, "
            f"current quota to create batch account in {region} region is {allowed}."
        )


class ResourceNotFoundError(BusinessLogicError):
    """
    Requested Azure resource does not exist.

    Examples:
        - Batch account name not in subscription
        - Pool ID unknown to the Batch service
    """
    pass


class PoolAllocationTimeoutError(BusinessLogicError):
    """
    Pool did not reach the steady allocation state before the timeout.
    """

    def __init__(self, pool_id: str, timeout_seconds: float, last_state=None):
        self.pool_id = pool_id
        self.timeout_seconds = timeout_seconds
        self.last_state = last_state
        super().__init__(
            f"Pool {pool_id} did not reach steady state within {timeout_seconds}s "
            f"(last allocation state: {last_state})"
        )


class TaskSubmissionError(BusinessLogicError):
    """
    Task collection submission failed for one or more chunks.
    """
    pass


class ConfigurationError(Exception):
    """
    System configuration error.

    These are fatal and indicate misconfiguration that prevents the
    workflow from starting.

    Examples:
        - AZURE_AUTH_LOCATION points at a missing file
        - Credential file lacks a subscription ID
        - Invalid Azure resource name
    """
    pass
