"""
Core Workflow Components.

Contains the pure building blocks of the Batch workflow, separated from
Azure SDK access and from workflow orchestration.

Structure:
    models/: Pure data structures (no business logic)
    logic/: Pure functions operating on those models (chunking, tallying,
            quota evaluation, bounded polling)
"""

from . import models
from . import logic

__all__ = [
    'models',
    'logic'
]
