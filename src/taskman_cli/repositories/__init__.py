"""Repository interfaces for taskman-cli.

This package contains the abstract base class that defines the contract for
task persistence. This is the "Port" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- taskman_cli.adapters.json_file (JSON file on local disk)
"""

from .repository import TaskStore, TaskStoreError

__all__ = [
    "TaskStore",
    "TaskStoreError",
]
