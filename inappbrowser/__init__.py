"""Embeddable in-app browser core."""

from . import browser, constants, errors, infra, paths

__all__ = [
    "browser",
    "constants",
    "errors",
    "infra",
    "paths",
]
