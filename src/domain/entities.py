"""ドメインエンティティ定義"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class TranscriptItem:
    """字幕の1アイテム（秒単位、小数点以下3桁に丸め済み）"""

    text: str
    start: float
    duration: float

    @property
    def end(self) -> float:
        """終了時刻（秒）"""
        return round(self.start + self.duration, 3)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "start": self.start,
            "duration": self.duration,
        }


@dataclass(frozen=True)
class SubtitleTrack:
    """
    字幕トラックのハンドル

    yt-dlp の字幕フォーマット情報（{"ext": "vtt", "url": "...", "name": "..."}）を保持する。
    言語選択では中身を参照しない（存在するかどうかのみ）。
    """

    ext: str | None = None
    url: str | None = None
    name: str | None = None

    @classmethod
    def from_info(cls, data: Mapping[str, Any]) -> "SubtitleTrack":
        return cls(
            ext=data.get("ext"),
            url=data.get("url"),
            name=data.get("name"),
        )


# 言語コード → 字幕トラックのリスト（キーは大文字小文字を区別、正規化しない）
TrackMap = Mapping[str, Sequence[SubtitleTrack]]


@dataclass(frozen=True)
class VideoMetadata:
    """YouTube動画のメタデータ（yt-dlp --dump-json の一部）"""

    title: str | None = None
    duration: float | None = None
    uploader: str | None = None
    upload_date: str | None = None  # YYYYMMDD
    view_count: int | None = None
    description: str | None = None
    thumbnail: str | None = None
    tags: list[str] | None = None
    categories: list[str] | None = None

    @classmethod
    def from_info(cls, info: Mapping[str, Any]) -> "VideoMetadata":
        return cls(
            title=info.get("title"),
            duration=info.get("duration"),
            uploader=info.get("uploader"),
            upload_date=info.get("upload_date"),
            view_count=info.get("view_count"),
            description=info.get("description"),
            thumbnail=info.get("thumbnail"),
            tags=info.get("tags"),
            categories=info.get("categories"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "duration": self.duration,
            "uploader": self.uploader,
            "upload_date": self.upload_date,
            "view_count": self.view_count,
            "description": self.description,
            "thumbnail": self.thumbnail,
            "tags": self.tags,
            "categories": self.categories,
        }


@dataclass(frozen=True)
class VideoInfo:
    """メタデータ取得結果（字幕トラック一覧 + メタデータ）"""

    manual_tracks: TrackMap = field(default_factory=dict)
    auto_tracks: TrackMap = field(default_factory=dict)
    metadata: VideoMetadata = field(default_factory=VideoMetadata)


@dataclass(frozen=True)
class SelectionResult:
    """字幕トラックの選択結果"""

    language_variant_used: str
    is_manual: bool

    @property
    def subtitle_type(self) -> str:
        return "manual" if self.is_manual else "auto-generated"


class AuthMethod(str, Enum):
    """yt-dlp に渡す認証方式"""

    NONE = "none"
    COOKIE_STRING = "cookieString"
    COOKIE_FILE = "cookieFile"


@dataclass(frozen=True)
class AuthContext:
    """認証情報（クッキー）"""

    method: AuthMethod = AuthMethod.NONE
    cookie_string: str | None = None
    cookie_file: str | None = None


class OutputFormat(str, Enum):
    """字幕の出力形式"""

    STRUCTURED = "structured"
    PLAIN_TEXT = "plainText"
    BOTH = "both"

    @property
    def includes_structured(self) -> bool:
        return self in (OutputFormat.STRUCTURED, OutputFormat.BOTH)

    @property
    def includes_plain_text(self) -> bool:
        return self in (OutputFormat.PLAIN_TEXT, OutputFormat.BOTH)


@dataclass(frozen=True)
class TranscriptRequest:
    """字幕取得リクエスト"""

    video_ref: str
    lang: str = "en"
    prefer_manual: bool = True
    output_format: OutputFormat = OutputFormat.STRUCTURED
    include_metadata: bool = False
    auth: AuthContext = field(default_factory=AuthContext)


@dataclass(frozen=True)
class TranscriptResult:
    """
    字幕取得結果

    transcript / transcript_text / metadata は出力形式とメタデータ要否に応じて
    build() が設定する。該当しない項目は None のまま。
    """

    youtube_id: str
    video_url: str
    language: str
    subtitle_type: str  # "manual" | "auto-generated"
    transcript_length: int
    transcript: list[TranscriptItem] | None = None
    transcript_text: str | None = None
    metadata: VideoMetadata | None = None

    @classmethod
    def build(
        cls,
        youtube_id: str,
        video_url: str,
        language: str,
        selection: SelectionResult,
        items: list[TranscriptItem],
        output_format: OutputFormat = OutputFormat.STRUCTURED,
        metadata: VideoMetadata | None = None,
    ) -> "TranscriptResult":
        """
        出力形式に応じた結果を組み立てる

        Args:
            youtube_id: 動画ID
            video_url: 正規化済みURL
            language: リクエストされた言語コード
            selection: 選択された字幕トラック
            items: パース済みの字幕アイテム
            output_format: 出力形式
            metadata: メタデータ（要求された場合のみ渡す）

        Returns:
            TranscriptResult
        """
        return cls(
            youtube_id=youtube_id,
            video_url=video_url,
            language=language,
            subtitle_type=selection.subtitle_type,
            transcript_length=len(items),
            transcript=list(items) if output_format.includes_structured else None,
            transcript_text=(
                " ".join(item.text for item in items)
                if output_format.includes_plain_text
                else None
            ),
            metadata=metadata,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "youtube_id": self.youtube_id,
            "video_url": self.video_url,
            "language": self.language,
            "subtitle_type": self.subtitle_type,
            "transcript_length": self.transcript_length,
        }
        if self.transcript is not None:
            result["transcript"] = [item.to_dict() for item in self.transcript]
        if self.transcript_text is not None:
            result["transcript_text"] = self.transcript_text
        if self.metadata is not None:
            result["metadata"] = self.metadata.to_dict()
        return result


@dataclass(frozen=True)
class BatchItemError:
    """バッチ処理で失敗したアイテム（continue_on_fail 時に結果の代わりに返す）"""

    error: str
    video_ref: str

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "video_ref": self.video_ref}
