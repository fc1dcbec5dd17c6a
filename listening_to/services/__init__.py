"""Services: link aggregation and now-playing resolution."""

from listening_to.services.now_playing_service import NowPlayingService
from listening_to.services.streaming_link_aggregator import (
    REFERENCE_PRIORITY,
    StreamingLinkAggregator,
    select_reference_url,
)

__all__ = [
    "NowPlayingService",
    "REFERENCE_PRIORITY",
    "StreamingLinkAggregator",
    "select_reference_url",
]
