"""taskman-cli domain models.

Pydantic models for tasks, filters, statistics, service results and
configuration.
"""

from .config_models import AppConfig, OutputConfig, StorageConfig
from .result import ErrorCode, Result
from .task import (
    FileInfo,
    Task,
    TaskCreate,
    TaskFilters,
    TaskStats,
    TaskStatus,
    TaskUpdate,
)

__all__ = [
    # Task models
    "Task",
    "TaskStatus",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "TaskStats",
    "FileInfo",
    # Results
    "Result",
    "ErrorCode",
    # Configuration
    "AppConfig",
    "StorageConfig",
    "OutputConfig",
]
