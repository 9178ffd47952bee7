"""Resolution channels and the baseline artifact resolver."""

from .channels import ChannelRegistry, ChannelResult, ResolutionChannel
from .resolver import ArtifactResolver, BaselineArtifacts

__all__ = [
    "ArtifactResolver",
    "BaselineArtifacts",
    "ChannelRegistry",
    "ChannelResult",
    "ResolutionChannel",
]
