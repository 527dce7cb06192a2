# Application Interfaces (Protocols)
from src.application.interfaces.metadata_provider import MetadataProvider
from src.application.interfaces.subtitle_fetcher import SubtitleFetcher

__all__ = [
    "MetadataProvider",
    "SubtitleFetcher",
]
