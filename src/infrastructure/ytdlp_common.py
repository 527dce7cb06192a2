"""yt-dlp クライアント共通処理（info dict の変換、字幕ファイルの探索、一時ファイル削除）"""

import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from src.domain.entities import SubtitleTrack, TrackMap, VideoInfo, VideoMetadata
from src.domain.exceptions import SubtitleFileNotFoundError
from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)

# yt-dlp が出力する字幕ファイルの言語サフィックス・拡張子
SUBTITLE_FILE_SUFFIXES = ("", "_US", "-US")
SUBTITLE_FILE_EXTENSIONS = ("vtt", "srt")


def _build_track_map(raw: Mapping[str, Any] | None) -> TrackMap:
    if not raw:
        return {}
    return {
        lang: [SubtitleTrack.from_info(entry) for entry in (entries or [])]
        for lang, entries in raw.items()
    }


def build_video_info(info: Mapping[str, Any]) -> VideoInfo:
    """
    yt-dlp の info dict を VideoInfo に変換

    subtitles → 手動字幕、automatic_captions → 自動生成字幕
    """
    return VideoInfo(
        manual_tracks=_build_track_map(info.get("subtitles")),
        auto_tracks=_build_track_map(info.get("automatic_captions")),
        metadata=VideoMetadata.from_info(info),
    )


def subtitle_file_candidates(output_base: Path, lang: str) -> list[Path]:
    """
    yt-dlp の出力テンプレート <base>.%(ext)s に対する字幕ファイル候補

    例: base.en.vtt, base.en.srt, base.en_US.vtt, ...
    """
    return [
        output_base.with_name(f"{output_base.name}.{lang}{suffix}.{ext}")
        for suffix in SUBTITLE_FILE_SUFFIXES
        for ext in SUBTITLE_FILE_EXTENSIONS
    ]


def read_subtitle_file(output_base: Path, lang: str) -> str:
    """
    ダウンロード済みの字幕ファイルを読み込む

    Raises:
        SubtitleFileNotFoundError: 候補のファイルが1つもない、または内容が空
    """
    for candidate in subtitle_file_candidates(output_base, lang):
        if not candidate.is_file():
            continue
        content = candidate.read_text(encoding="utf-8")
        if content:
            logger.debug(f"  字幕ファイル: {candidate.name}")
            return content

    raise SubtitleFileNotFoundError(lang)


def remove_quietly(path: Path) -> None:
    """一時ファイル・ディレクトリを削除（失敗してもログのみ）"""
    try:
        if path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"[yt-dlp] 一時ファイルの削除に失敗: {path} - {e}")
