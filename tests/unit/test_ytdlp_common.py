"""yt-dlp 共通処理のテスト"""

from pathlib import Path

import pytest

from src.domain.entities import SubtitleTrack
from src.domain.exceptions import SubtitleFileNotFoundError
from src.infrastructure.ytdlp_common import (
    build_video_info,
    read_subtitle_file,
    remove_quietly,
    subtitle_file_candidates,
)


class TestBuildVideoInfo:
    """info dict → VideoInfo"""

    def test_tracks_and_metadata(self) -> None:
        info = {
            "title": "Title",
            "view_count": 3,
            "subtitles": {"en": [{"ext": "vtt", "url": "u1", "name": "English"}]},
            "automatic_captions": {"en": [], "ja": [{"ext": "srv3"}]},
        }
        video_info = build_video_info(info)

        assert video_info.manual_tracks == {"en": [SubtitleTrack(ext="vtt", url="u1", name="English")]}
        assert video_info.auto_tracks == {"en": [], "ja": [SubtitleTrack(ext="srv3")]}
        assert video_info.metadata.title == "Title"
        assert video_info.metadata.view_count == 3

    def test_missing_tracks(self) -> None:
        """subtitles / automatic_captions がない、または None"""
        video_info = build_video_info({"subtitles": None})
        assert video_info.manual_tracks == {}
        assert video_info.auto_tracks == {}


class TestSubtitleFiles:
    """字幕ファイルの探索"""

    def test_candidates_order(self, tmp_path: Path) -> None:
        base = tmp_path / "transcript"
        names = [p.name for p in subtitle_file_candidates(base, "en")]
        assert names == [
            "transcript.en.vtt",
            "transcript.en.srt",
            "transcript.en_US.vtt",
            "transcript.en_US.srt",
            "transcript.en-US.vtt",
            "transcript.en-US.srt",
        ]

    def test_read_first_existing(self, tmp_path: Path) -> None:
        base = tmp_path / "transcript"
        (tmp_path / "transcript.en-US.vtt").write_text("later", encoding="utf-8")
        (tmp_path / "transcript.en.srt").write_text("first", encoding="utf-8")
        assert read_subtitle_file(base, "en") == "first"

    def test_not_found(self, tmp_path: Path) -> None:
        (tmp_path / "transcript.fr.vtt").write_text("x", encoding="utf-8")
        with pytest.raises(SubtitleFileNotFoundError, match='language "en"'):
            read_subtitle_file(tmp_path / "transcript", "en")


class TestRemoveQuietly:
    """一時ファイル削除"""

    def test_file_and_dir(self, tmp_path: Path) -> None:
        work_dir = tmp_path / "work"
        work_dir.mkdir()
        (work_dir / "a.vtt").write_text("x", encoding="utf-8")
        single = tmp_path / "single.txt"
        single.write_text("x", encoding="utf-8")

        remove_quietly(work_dir)
        remove_quietly(single)

        assert not work_dir.exists()
        assert not single.exists()

    def test_missing_path(self, tmp_path: Path) -> None:
        remove_quietly(tmp_path / "does-not-exist")
