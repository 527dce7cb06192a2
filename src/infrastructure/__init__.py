# Infrastructure Layer
from src.infrastructure.ytdlp_cli_client import YtdlpCliClient
from src.infrastructure.ytdlp_library_client import YtdlpLibraryClient

__all__ = [
    "YtdlpCliClient",
    "YtdlpLibraryClient",
]
