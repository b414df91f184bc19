"""
Core Business Logic Package.

Contains logic that operates on pure data models.
Separated from models to maintain clean architecture.

Exports:
    Batching: chunked, chunk_count
    Polling: wait_until, PollOutcome
    Calculations: evaluate_quota, tally_task_states, build_task_tally, ...
"""

from .batching import (
    chunked,
    chunk_count
)

from .polling import (
    PollOutcome,
    wait_until
)

from .calculations import (
    normalize_region,
    count_accounts_in_region,
    find_account_by_name,
    evaluate_quota,
    state_label,
    tally_task_states,
    build_task_tally,
    resource_group_from_id
)

__all__ = [
    # Batching
    'chunked',
    'chunk_count',

    # Polling
    'PollOutcome',
    'wait_until',

    # Calculations
    'normalize_region',
    'count_accounts_in_region',
    'find_account_by_name',
    'evaluate_quota',
    'state_label',
    'tally_task_states',
    'build_task_tally',
    'resource_group_from_id'
]
