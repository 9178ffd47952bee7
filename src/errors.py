"""Exception hierarchy shared by the locator, resolver and repository layers."""

from __future__ import annotations


class TinkerPublishError(Exception):
    """Base class for every error raised by tinker-publish."""


class ConfigurationError(TinkerPublishError):
    """Raised when configuration is missing or malformed."""


class ResolutionError(TinkerPublishError):
    """Raised when a required artifact cannot be resolved."""


class AmbiguousArtifactError(ResolutionError):
    """Raised when one coordinate resolves to more than one candidate file."""


class RepositoryError(TinkerPublishError):
    """Raised on transport failures while talking to an artifact repository."""


class UnknownArtifactKindError(TinkerPublishError, ValueError):
    """Raised for an artifact kind missing from the kind table."""
