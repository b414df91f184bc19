"""
Workflow Calculations.

Contains calculation logic separated from data models.
All functions are pure and operate on plain values or SDK objects
through duck typing (only attribute reads, no SDK imports).

Exports:
    normalize_region: Canonical form of an Azure region name
    count_accounts_in_region: Count accounts located in a region
    find_account_by_name: Locate an account by name
    evaluate_quota: Build a QuotaCheck
    state_label: Convert an SDK state value to its string label
    tally_task_states: Count tasks by state, first-seen order
    build_task_tally: TaskTally for one fetched page
    resource_group_from_id: Extract the resource group from an ARM id
"""

from typing import Any, Dict, Iterable, Optional

from ..models.enums import TaskStateLabel
from ..models.results import QuotaCheck, TaskTally


def normalize_region(region: Optional[str]) -> str:
    """
    Canonical region name: lowercase, no spaces.

    'East US' and 'eastus' compare equal.
    """
    return (region or "").replace(" ", "").lower()


def count_accounts_in_region(accounts: Iterable[Any], region: str) -> int:
    """
    Count accounts whose location matches the region.

    Args:
        accounts: Objects with a 'location' attribute
        region: Region name in any casing

    Returns:
        Number of accounts in the region
    """
    target = normalize_region(region)
    return sum(1 for account in accounts if normalize_region(getattr(account, 'location', None)) == target)


def find_account_by_name(accounts: Iterable[Any], name: str) -> Optional[Any]:
    """Return the first account whose name matches, or None."""
    for account in accounts:
        if getattr(account, 'name', None) == name:
            return account
    return None


def evaluate_quota(
    allowed: int,
    accounts: Iterable[Any],
    region: str,
    desired_name: str
) -> QuotaCheck:
    """
    Evaluate whether the workflow may proceed with account acquisition.

    A same-named account is reusable regardless of quota; otherwise a new
    account may be created only while existing_in_region < allowed.
    """
    accounts = list(accounts)
    reusable = find_account_by_name(accounts, desired_name)
    return QuotaCheck(
        region=normalize_region(region),
        allowed=allowed,
        existing_in_region=count_accounts_in_region(accounts, region),
        reusable_account=reusable.name if reusable is not None else None
    )


def state_label(state: Any) -> str:
    """
    Convert an SDK state (enum member, string or None) to a lowercase label.
    """
    if state is None:
        return TaskStateLabel.UNKNOWN.value
    value = getattr(state, 'value', state)
    return str(value).lower()


def tally_task_states(tasks: Iterable[Any]) -> Dict[str, int]:
    """
    Count tasks by state.

    The returned dict preserves first-seen order so printed tallies are
    deterministic for a given page.
    """
    counts: Dict[str, int] = {}
    for task in tasks:
        label = state_label(getattr(task, 'state', None))
        counts[label] = counts.get(label, 0) + 1
    return counts


def build_task_tally(tasks: Iterable[Any], has_next_page: bool = False) -> TaskTally:
    """Build a TaskTally for one fetched page of tasks."""
    tasks = list(tasks)
    return TaskTally(
        counts=tally_task_states(tasks),
        page_size=len(tasks),
        has_next_page=has_next_page
    )


def resource_group_from_id(resource_id: Optional[str]) -> Optional[str]:
    """
    Extract the resource group name from an ARM resource id.

    '/subscriptions/s/resourceGroups/rg1/providers/Microsoft.Batch/batchAccounts/ba1' -> 'rg1'
    """
    if not resource_id:
        return None
    parts = resource_id.strip('/').split('/')
    for index, part in enumerate(parts[:-1]):
        if part.lower() == 'resourcegroups':
            return parts[index + 1]
    return None
