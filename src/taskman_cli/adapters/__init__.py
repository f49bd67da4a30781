"""Storage adapters for taskman-cli.

Concrete implementations of the repository interfaces in
``taskman_cli.repositories``.
"""

from .json_file import JsonTaskStore

__all__ = ["JsonTaskStore"]
