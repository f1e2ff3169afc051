"""Build the process-wide command catalog."""

from functools import lru_cache

from commands.meta_ops import META_ADMIN_COMMANDS
from commands.registry import Catalog


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    return Catalog.from_entries(META_ADMIN_COMMANDS)
