"""yt-dlp パッケージ（Python API）によるメタデータ・字幕取得"""

import tempfile
from pathlib import Path
from typing import Any

import yt_dlp

from src.domain.entities import AuthContext, VideoInfo
from src.domain.exceptions import MetadataFetchError, SubtitleFetchError
from src.infrastructure.cookies import cookie_file_for
from src.infrastructure.logging_config import get_logger, trace_tool
from src.infrastructure.ytdlp_common import (
    build_video_info,
    read_subtitle_file,
    remove_quietly,
)

logger = get_logger(__name__)


class YtdlpLibraryClient:
    """
    yt_dlp.YoutubeDL を使用した実装（MetadataProvider / SubtitleFetcher）

    yt-dlp コマンドがインストールされていない環境でも、
    Pythonパッケージだけで同じ処理ができる
    """

    def __init__(self, temp_dir: str | None = None) -> None:
        self.temp_dir = temp_dir
        # 共通オプション（動画本体はダウンロードしない）
        self.base_opts: dict[str, Any] = {
            "quiet": True,
            "no_warnings": True,
            "skip_download": True,
        }

    def _opts(self, cookie_path: str | None, **extra: Any) -> dict[str, Any]:
        opts = {**self.base_opts, **extra}
        if cookie_path:
            opts["cookiefile"] = cookie_path
        return opts

    @trace_tool(name="ytdlp_fetch_metadata")
    def fetch_metadata(self, video_url: str, auth: AuthContext) -> VideoInfo:
        """
        動画情報を取得（ダウンロードなし）

        Raises:
            MetadataFetchError: 取得失敗
        """
        logger.debug(f"[yt-dlp] メタデータ取得: {video_url}")

        with cookie_file_for(auth, self.temp_dir) as cookie_path:
            try:
                with yt_dlp.YoutubeDL(self._opts(cookie_path)) as ydl:
                    info = ydl.extract_info(video_url, download=False)
            except yt_dlp.utils.DownloadError as e:
                error_msg = str(e)
                if "Private video" in error_msg:
                    logger.info(f"[yt-dlp] 非公開動画: {video_url}")
                elif "Video unavailable" in error_msg:
                    logger.info(f"[yt-dlp] 動画が利用不可: {video_url}")
                else:
                    logger.error(f"[yt-dlp] メタデータ取得失敗: {video_url} - {e}")
                raise MetadataFetchError(f"Failed to fetch video metadata: {e}") from e

        if not info:
            raise MetadataFetchError("Failed to fetch video metadata: empty response")

        return build_video_info(info)

    @trace_tool(name="ytdlp_fetch_subtitle")
    def fetch_subtitle_text(
        self,
        video_url: str,
        lang: str,
        is_manual: bool,
        auth: AuthContext,
    ) -> str:
        """
        字幕ファイルを一時ディレクトリに書き出して読み込む

        Raises:
            SubtitleFetchError: ダウンロード失敗
            SubtitleFileNotFoundError: 字幕ファイルが出力されなかった
        """
        work_dir = Path(tempfile.mkdtemp(prefix="transcript-", dir=self.temp_dir))
        output_base = work_dir / "transcript"

        logger.debug(
            f"[yt-dlp] 字幕取得: {video_url} lang={lang} "
            f"{'manual' if is_manual else 'auto'}"
        )

        try:
            with cookie_file_for(auth, self.temp_dir) as cookie_path:
                opts = self._opts(
                    cookie_path,
                    writesubtitles=is_manual,
                    writeautomaticsub=not is_manual,
                    subtitleslangs=[lang],
                    subtitlesformat="vtt/srt/best",
                    outtmpl=f"{output_base}.%(ext)s",
                )
                try:
                    with yt_dlp.YoutubeDL(opts) as ydl:
                        ydl.download([video_url])
                except yt_dlp.utils.DownloadError as e:
                    logger.error(f"[yt-dlp] 字幕取得失敗: {video_url} - {e}")
                    raise SubtitleFetchError(f"Failed to download transcript: {e}") from e

            return read_subtitle_file(output_base, lang)
        finally:
            remove_quietly(work_dir)
