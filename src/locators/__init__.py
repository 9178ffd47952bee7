"""Variant artifacts locators and the factory selecting between them."""

from .base import VariantArtifactsLocator
from .factory import (
    LocalOverrideStrategy,
    LocatorFactory,
    LocatorStrategy,
    RemoteStrategy,
    select_strategy,
)
from .local import LocalOverrideLocator
from .remote import RemoteLocator

__all__ = [
    "VariantArtifactsLocator",
    "LocalOverrideLocator",
    "RemoteLocator",
    "LocatorFactory",
    "LocatorStrategy",
    "LocalOverrideStrategy",
    "RemoteStrategy",
    "select_strategy",
]
