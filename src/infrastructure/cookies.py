"""yt-dlp 用クッキーファイルの準備"""

import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from src.domain.entities import AuthContext, AuthMethod
from src.infrastructure.logging_config import get_logger
from src.infrastructure.ytdlp_common import remove_quietly

logger = get_logger(__name__)

NETSCAPE_HEADER = "# Netscape HTTP Cookie File\n"


@contextmanager
def cookie_file_for(
    auth: AuthContext,
    temp_dir: str | None = None,
) -> Iterator[str | None]:
    """
    認証情報に対応するクッキーファイルのパスを返すコンテキストマネージャ

    - none: None
    - cookieFile: 指定されたパスをそのまま返す
    - cookieString: Netscape形式の一時ファイルを作成し、終了時に削除

    一時ファイルの書き込みに失敗した場合はクッキーなしで続行する。

    Example:
        with cookie_file_for(auth) as cookie_path:
            if cookie_path:
                cmd += ["--cookies", cookie_path]
    """
    if auth.method == AuthMethod.COOKIE_FILE:
        yield auth.cookie_file or None
        return

    if auth.method != AuthMethod.COOKIE_STRING or not (auth.cookie_string or "").strip():
        yield None
        return

    path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            prefix="yt-cookies-",
            suffix=".txt",
            dir=temp_dir,
            delete=False,
            encoding="utf-8",
        ) as f:
            path = Path(f.name)
            f.write(NETSCAPE_HEADER + auth.cookie_string)
    except OSError as e:
        logger.warning(f"[Cookie] クッキーファイルの書き込みに失敗、クッキーなしで続行: {e}")
        if path:
            remove_quietly(path)
        yield None
        return

    try:
        yield str(path)
    finally:
        remove_quietly(path)
