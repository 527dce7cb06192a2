"""動画メタデータ取得インターフェース"""

from typing import Protocol

from src.domain.entities import AuthContext, VideoInfo


class MetadataProvider(Protocol):
    """動画メタデータ（字幕トラック一覧を含む）取得のインターフェース"""

    def fetch_metadata(self, video_url: str, auth: AuthContext) -> VideoInfo:
        """
        動画のメタデータを取得

        Args:
            video_url: YouTube動画URL
            auth: 認証情報

        Returns:
            VideoInfo（手動字幕・自動生成字幕のトラック一覧とメタデータ）

        Raises:
            MetadataFetchError: 取得失敗
            YtdlpNotFoundError: yt-dlp が見つからない
        """
        ...
