"""字幕取得インターフェース"""

from typing import Protocol

from src.domain.entities import AuthContext


class SubtitleFetcher(Protocol):
    """字幕取得のインターフェース"""

    def fetch_subtitle_text(
        self,
        video_url: str,
        lang: str,
        is_manual: bool,
        auth: AuthContext,
    ) -> str:
        """
        字幕ファイルの内容（VTT / SRT）を取得

        Args:
            video_url: YouTube動画URL
            lang: 言語コード
            is_manual: 手動字幕を取得するか（Falseなら自動生成字幕）
            auth: 認証情報

        Returns:
            字幕ファイルの内容

        Raises:
            SubtitleFetchError: ダウンロード失敗
            SubtitleFileNotFoundError: 対応する言語の字幕ファイルがない
        """
        ...
