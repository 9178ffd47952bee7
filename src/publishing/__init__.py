"""Publishing of the current build's variant artifacts."""

from .coordinator import PublishingCoordinator, find_resguard_package

__all__ = ["PublishingCoordinator", "find_resguard_package"]
