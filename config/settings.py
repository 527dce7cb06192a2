"""設定管理"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings

from src.domain.entities import AuthContext, AuthMethod, OutputFormat


class Settings(BaseSettings):
    """アプリケーション設定"""

    # yt-dlp
    # cli: yt-dlp コマンドを実行 / library: yt_dlp パッケージを直接使用
    YTDLP_BACKEND: Literal["cli", "library"] = "cli"
    YTDLP_PATH: str = "yt-dlp"
    # サブプロセスのタイムアウト（秒）。None なら無制限
    YTDLP_TIMEOUT: int | None = None

    # 字幕ファイルの一時出力先（None ならシステムの一時ディレクトリ）
    TEMP_DIR: str | None = None

    # Request defaults
    DEFAULT_LANGUAGE: str = "en"
    PREFER_MANUAL: bool = True
    OUTPUT_FORMAT: OutputFormat = OutputFormat.STRUCTURED
    INCLUDE_METADATA: bool = False

    # Authentication（限定公開・年齢制限動画用）
    AUTH_METHOD: AuthMethod = AuthMethod.NONE
    COOKIE_STRING: str | None = None
    COOKIE_FILE: str | None = None

    # Batch
    BATCH_MAX_WORKERS: int = 1
    CONTINUE_ON_FAIL: bool = False

    # Logging & Observability
    LOG_LEVEL: str = "INFO"
    LANGSMITH_TRACING: bool = False
    LANGSMITH_API_KEY: str | None = None
    LANGSMITH_PROJECT: str = "ytranscript"

    def auth_context(self) -> AuthContext:
        """設定から認証情報を組み立て"""
        return AuthContext(
            method=self.AUTH_METHOD,
            cookie_string=self.COOKIE_STRING,
            cookie_file=self.COOKIE_FILE,
        )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """シングルトンで設定を取得"""
    return Settings()
