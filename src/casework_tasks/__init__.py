"""Casework Tasks - task tracking backend for caseworkers.

Task CRUD, search, pagination and statistics over a REST API.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("casework-tasks")
except PackageNotFoundError:
    __version__ = "0.1.0.dev0"

__all__ = ["__version__"]
