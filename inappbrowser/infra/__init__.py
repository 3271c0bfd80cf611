"""Infrastructure modules for the in-app browser."""

from . import config_store, scratch_store

__all__ = ["config_store", "scratch_store"]
