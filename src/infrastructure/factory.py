"""設定からyt-dlpクライアント・ユースケースを組み立てる"""

from config.settings import Settings
from src.application.usecases.fetch_transcript import FetchTranscriptUseCase
from src.infrastructure.ytdlp_cli_client import YtdlpCliClient
from src.infrastructure.ytdlp_library_client import YtdlpLibraryClient


def build_ytdlp_client(settings: Settings) -> YtdlpCliClient | YtdlpLibraryClient:
    """YTDLP_BACKEND に応じたクライアントを返す"""
    if settings.YTDLP_BACKEND == "library":
        return YtdlpLibraryClient(temp_dir=settings.TEMP_DIR)
    return YtdlpCliClient(
        ytdlp_path=settings.YTDLP_PATH,
        temp_dir=settings.TEMP_DIR,
        timeout=settings.YTDLP_TIMEOUT,
    )


def build_usecase(settings: Settings) -> FetchTranscriptUseCase:
    """DIでユースケースを組み立て（メタデータ取得・字幕取得は同じクライアント）"""
    client = build_ytdlp_client(settings)
    return FetchTranscriptUseCase(
        metadata_provider=client,
        subtitle_fetcher=client,
    )
