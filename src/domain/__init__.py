# Domain Layer
from src.domain.entities import (
    AuthContext,
    AuthMethod,
    BatchItemError,
    OutputFormat,
    SelectionResult,
    SubtitleTrack,
    TrackMap,
    TranscriptItem,
    TranscriptRequest,
    TranscriptResult,
    VideoInfo,
    VideoMetadata,
)
from src.domain.exceptions import (
    InvalidInputError,
    MetadataFetchError,
    NoTranscriptFoundError,
    SubtitleFetchError,
    SubtitleFileNotFoundError,
    TranscriptError,
    YtdlpNotFoundError,
)

__all__ = [
    "TranscriptItem",
    "SubtitleTrack",
    "TrackMap",
    "VideoMetadata",
    "VideoInfo",
    "SelectionResult",
    "AuthMethod",
    "AuthContext",
    "OutputFormat",
    "TranscriptRequest",
    "TranscriptResult",
    "BatchItemError",
    "TranscriptError",
    "InvalidInputError",
    "MetadataFetchError",
    "YtdlpNotFoundError",
    "NoTranscriptFoundError",
    "SubtitleFetchError",
    "SubtitleFileNotFoundError",
]
