"""yt-dlp コマンドによるメタデータ・字幕取得"""

import json
import subprocess
import tempfile
from pathlib import Path

from src.domain.entities import AuthContext, VideoInfo
from src.domain.exceptions import (
    MetadataFetchError,
    SubtitleFetchError,
    YtdlpNotFoundError,
)
from src.infrastructure.cookies import cookie_file_for
from src.infrastructure.logging_config import get_logger, trace_tool
from src.infrastructure.ytdlp_common import (
    build_video_info,
    read_subtitle_file,
    remove_quietly,
)

logger = get_logger(__name__)


def _is_command_not_found(message: str) -> bool:
    return "command not found" in message or "not recognized as an internal" in message


class YtdlpCliClient:
    """yt-dlp コマンドを subprocess で実行する実装（MetadataProvider / SubtitleFetcher）"""

    def __init__(
        self,
        ytdlp_path: str = "yt-dlp",
        temp_dir: str | None = None,
        timeout: int | None = None,
    ):
        """
        Args:
            ytdlp_path: yt-dlpの実行パス
            temp_dir: 字幕ファイルの一時出力先（Noneならシステムの一時ディレクトリ）
            timeout: コマンドのタイムアウト（秒）
        """
        self.ytdlp_path = ytdlp_path
        self.temp_dir = temp_dir
        self.timeout = timeout

    def _run(self, args: list[str], cookie_path: str | None, video_url: str) -> str:
        """yt-dlp を実行して標準出力を返す"""
        cmd = [self.ytdlp_path, *args]
        if cookie_path:
            cmd += ["--cookies", cookie_path]
        cmd.append(video_url)

        logger.debug(f"[yt-dlp] コマンド: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except OSError as e:
            # 存在しない・ディレクトリ・実行権限なし等
            logger.error(f"[yt-dlp] 実行ファイルを起動できない: {self.ytdlp_path} - {e}")
            raise YtdlpNotFoundError() from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or str(e)).strip()
            if _is_command_not_found(detail):
                raise YtdlpNotFoundError() from e
            raise
        return result.stdout

    @trace_tool(name="ytdlp_fetch_metadata")
    def fetch_metadata(self, video_url: str, auth: AuthContext) -> VideoInfo:
        """
        yt-dlp --dump-json で動画情報を取得

        Raises:
            MetadataFetchError: 取得・JSONパース失敗
            YtdlpNotFoundError: yt-dlp が見つからない
        """
        logger.debug(f"[yt-dlp] メタデータ取得: {video_url}")

        with cookie_file_for(auth, self.temp_dir) as cookie_path:
            try:
                stdout = self._run(
                    ["--dump-json", "--skip-download"], cookie_path, video_url
                )
            except subprocess.TimeoutExpired as e:
                raise MetadataFetchError(f"Failed to fetch video metadata: timeout ({e})") from e
            except subprocess.CalledProcessError as e:
                detail = (e.stderr or e.stdout or str(e)).strip()
                logger.error(f"[yt-dlp] メタデータ取得失敗: {video_url} - {detail}")
                raise MetadataFetchError(f"Failed to fetch video metadata: {detail}") from e

        try:
            info = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise MetadataFetchError(f"Failed to fetch video metadata: {e}") from e

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
        yt-dlp --write-subs / --write-auto-subs で字幕ファイルを書き出して読み込む

        書き出し先の一時ディレクトリは読み込み後に削除する。

        Raises:
            SubtitleFetchError: ダウンロード失敗
            SubtitleFileNotFoundError: 字幕ファイルが出力されなかった
            YtdlpNotFoundError: yt-dlp が見つからない
        """
        flag = "--write-subs" if is_manual else "--write-auto-subs"
        work_dir = Path(tempfile.mkdtemp(prefix="transcript-", dir=self.temp_dir))
        output_base = work_dir / "transcript"

        logger.debug(f"[yt-dlp] 字幕取得: {video_url} lang={lang} {flag}")

        try:
            with cookie_file_for(auth, self.temp_dir) as cookie_path:
                try:
                    self._run(
                        [
                            flag,
                            "--sub-lang", lang,
                            "--skip-download",
                            "--output", f"{output_base}.%(ext)s",
                        ],
                        cookie_path,
                        video_url,
                    )
                except subprocess.TimeoutExpired as e:
                    raise SubtitleFetchError(f"Failed to download transcript: timeout ({e})") from e
                except subprocess.CalledProcessError as e:
                    detail = (e.stderr or e.stdout or str(e)).strip()
                    logger.error(f"[yt-dlp] 字幕取得失敗: {video_url} - {detail}")
                    raise SubtitleFetchError(f"Failed to download transcript: {detail}") from e

            return read_subtitle_file(output_base, lang)
        finally:
            remove_quietly(work_dir)
