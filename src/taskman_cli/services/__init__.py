"""Services module for taskman-cli - Business logic layer."""

from .config_service import ConfigService, get_config_service
from .task_service import (
    ServiceState,
    TaskService,
    get_task_service,
    get_task_store,
)

__all__ = [
    "TaskService",
    "ServiceState",
    "get_task_service",
    "get_task_store",
    "ConfigService",
    "get_config_service",
]
