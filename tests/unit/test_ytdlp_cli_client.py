"""yt-dlp コマンドクライアントのテスト（subprocess をモック）"""

import json
import subprocess
from pathlib import Path

import pytest

from src.domain.entities import AuthContext, AuthMethod, SubtitleTrack
from src.domain.exceptions import (
    MetadataFetchError,
    SubtitleFetchError,
    SubtitleFileNotFoundError,
    YtdlpNotFoundError,
)
from src.infrastructure import ytdlp_cli_client
from src.infrastructure.ytdlp_cli_client import YtdlpCliClient

VIDEO_URL = "https://www.youtube.com/watch?v=abc123"

INFO = {
    "id": "abc123",
    "title": "Title",
    "duration": 212,
    "uploader": "Uploader",
    "upload_date": "20240101",
    "view_count": 100,
    "subtitles": {"en": [{"ext": "vtt", "url": "https://example.com/en.vtt"}]},
    "automatic_captions": {"fr": [{"ext": "vtt", "url": "https://example.com/fr.vtt"}]},
}

VTT = "WEBVTT\n\n00:00:00.000 --> 00:00:01.000\nHello\n"


class FakeRun:
    """subprocess.run の代わりにコマンドを記録する"""

    def __init__(
        self,
        stdout: str = "",
        error: Exception | None = None,
        write_file: str | None = None,
    ):
        self.stdout = stdout
        self.error = error
        # --output のテンプレートに対して書き出すファイル名のサフィックス（例: "en.vtt"）
        self.write_file = write_file
        self.commands: list[list[str]] = []
        self.cookie_contents: list[str] = []

    def __call__(self, cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
        self.commands.append(cmd)
        if "--cookies" in cmd:
            cookie_path = Path(cmd[cmd.index("--cookies") + 1])
            if cookie_path.exists():
                self.cookie_contents.append(cookie_path.read_text(encoding="utf-8"))
        if self.error:
            raise self.error
        if self.write_file:
            template = cmd[cmd.index("--output") + 1]
            Path(template.replace("%(ext)s", self.write_file)).write_text(VTT, encoding="utf-8")
        return subprocess.CompletedProcess(cmd, 0, stdout=self.stdout, stderr="")


@pytest.fixture
def client(tmp_path: Path) -> YtdlpCliClient:
    return YtdlpCliClient(ytdlp_path="/opt/bin/yt-dlp", temp_dir=str(tmp_path))


def _install(monkeypatch: pytest.MonkeyPatch, fake: FakeRun) -> FakeRun:
    monkeypatch.setattr(ytdlp_cli_client.subprocess, "run", fake)
    return fake


class TestFetchMetadata:
    """メタデータ取得"""

    def test_success(self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = _install(monkeypatch, FakeRun(stdout=json.dumps(INFO)))

        info = client.fetch_metadata(VIDEO_URL, AuthContext())

        assert fake.commands == [
            ["/opt/bin/yt-dlp", "--dump-json", "--skip-download", VIDEO_URL],
        ]
        assert info.manual_tracks == {
            "en": [SubtitleTrack(ext="vtt", url="https://example.com/en.vtt")]
        }
        assert list(info.auto_tracks) == ["fr"]
        assert info.metadata.title == "Title"
        assert info.metadata.upload_date == "20240101"

    def test_cookie_string(
        self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """クッキー文字列は一時ファイルにして渡し、終了後に削除"""
        fake = _install(monkeypatch, FakeRun(stdout=json.dumps(INFO)))
        auth = AuthContext(method=AuthMethod.COOKIE_STRING, cookie_string=".youtube.com\tTRUE\t/\tTRUE\t0\tSID\tx")

        client.fetch_metadata(VIDEO_URL, auth)

        cmd = fake.commands[0]
        assert "--cookies" in cmd
        assert cmd[-1] == VIDEO_URL
        assert fake.cookie_contents[0].startswith("# Netscape HTTP Cookie File\n.youtube.com")
        assert not Path(cmd[cmd.index("--cookies") + 1]).exists()
        assert list(tmp_path.iterdir()) == []

    def test_cookie_file(self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch) -> None:
        """クッキーファイルはパスをそのまま渡す"""
        fake = _install(monkeypatch, FakeRun(stdout=json.dumps(INFO)))
        auth = AuthContext(method=AuthMethod.COOKIE_FILE, cookie_file="/secrets/cookies.txt")

        client.fetch_metadata(VIDEO_URL, auth)

        assert fake.commands[0][-3:] == ["--cookies", "/secrets/cookies.txt", VIDEO_URL]

    def test_binary_not_found(self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch) -> None:
        _install(monkeypatch, FakeRun(error=FileNotFoundError("No such file")))
        with pytest.raises(YtdlpNotFoundError, match="binary not found"):
            client.fetch_metadata(VIDEO_URL, AuthContext())

    def test_misconfigured_path(self, tmp_path: Path) -> None:
        """パスがディレクトリを指している場合も yt-dlp なしとして扱う"""
        client = YtdlpCliClient(ytdlp_path=str(tmp_path), temp_dir=str(tmp_path))
        with pytest.raises(YtdlpNotFoundError):
            client.fetch_metadata(VIDEO_URL, AuthContext())

    def test_permission_denied(self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch) -> None:
        _install(monkeypatch, FakeRun(error=PermissionError(13, "Permission denied")))
        with pytest.raises(YtdlpNotFoundError, match="binary not found"):
            client.fetch_metadata(VIDEO_URL, AuthContext())

    def test_command_not_found(self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch) -> None:
        error = subprocess.CalledProcessError(127, ["yt-dlp"], output="", stderr="sh: yt-dlp: command not found")
        _install(monkeypatch, FakeRun(error=error))
        with pytest.raises(YtdlpNotFoundError):
            client.fetch_metadata(VIDEO_URL, AuthContext())

    def test_process_error(self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch) -> None:
        error = subprocess.CalledProcessError(1, ["yt-dlp"], output="", stderr="ERROR: Video unavailable")
        _install(monkeypatch, FakeRun(error=error))
        with pytest.raises(MetadataFetchError, match="Failed to fetch video metadata: ERROR: Video unavailable"):
            client.fetch_metadata(VIDEO_URL, AuthContext())

    def test_timeout(self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch) -> None:
        _install(monkeypatch, FakeRun(error=subprocess.TimeoutExpired(["yt-dlp"], 5)))
        with pytest.raises(MetadataFetchError, match="timeout"):
            client.fetch_metadata(VIDEO_URL, AuthContext())

    def test_invalid_json(self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch) -> None:
        _install(monkeypatch, FakeRun(stdout="not json"))
        with pytest.raises(MetadataFetchError):
            client.fetch_metadata(VIDEO_URL, AuthContext())


class TestFetchSubtitleText:
    """字幕取得"""

    def test_manual(
        self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        fake = _install(monkeypatch, FakeRun(write_file="en.vtt"))

        text = client.fetch_subtitle_text(VIDEO_URL, "en", True, AuthContext())

        assert text == VTT
        cmd = fake.commands[0]
        assert cmd[:5] == ["/opt/bin/yt-dlp", "--write-subs", "--sub-lang", "en", "--skip-download"]
        assert cmd[cmd.index("--output") + 1].endswith("transcript.%(ext)s")
        assert cmd[-1] == VIDEO_URL
        # 一時ディレクトリは削除される
        assert list(tmp_path.iterdir()) == []

    def test_auto_with_region_suffix(self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch) -> None:
        """自動生成字幕、地域付きファイル名（en_US.srt）"""
        fake = _install(monkeypatch, FakeRun(write_file="en_US.srt"))

        text = client.fetch_subtitle_text(VIDEO_URL, "en", False, AuthContext())

        assert text == VTT
        assert fake.commands[0][1] == "--write-auto-subs"

    def test_file_not_found(
        self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        _install(monkeypatch, FakeRun())
        with pytest.raises(SubtitleFileNotFoundError, match='language "ja"'):
            client.fetch_subtitle_text(VIDEO_URL, "ja", True, AuthContext())
        assert list(tmp_path.iterdir()) == []

    def test_download_error(self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch) -> None:
        error = subprocess.CalledProcessError(1, ["yt-dlp"], output="", stderr="ERROR: HTTP Error 429")
        _install(monkeypatch, FakeRun(error=error))
        with pytest.raises(SubtitleFetchError, match="Failed to download transcript: ERROR: HTTP Error 429"):
            client.fetch_subtitle_text(VIDEO_URL, "en", True, AuthContext())

    def test_binary_not_found(self, client: YtdlpCliClient, monkeypatch: pytest.MonkeyPatch) -> None:
        _install(monkeypatch, FakeRun(error=FileNotFoundError("No such file")))
        with pytest.raises(YtdlpNotFoundError):
            client.fetch_subtitle_text(VIDEO_URL, "en", True, AuthContext())
