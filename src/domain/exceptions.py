"""ドメイン固有の例外定義"""


class TranscriptError(Exception):
    """基底例外クラス"""

    pass


class InvalidInputError(TranscriptError):
    """入力が不正（動画ID/URLが空など）"""

    pass


class MetadataFetchError(TranscriptError):
    """動画メタデータの取得エラー"""

    pass


class YtdlpNotFoundError(MetadataFetchError):
    """yt-dlp が見つからない、または実行できない"""

    def __init__(
        self,
        message: str = (
            "yt-dlp binary not found or failed to run. "
            "Please check the binary path setting."
        ),
    ):
        super().__init__(message)


class NoTranscriptFoundError(TranscriptError):
    """指定言語の字幕が見つからない"""

    def __init__(self, language: str, available_languages: list[str]):
        self.language = language
        self.available_languages = available_languages
        listing = ", ".join(available_languages) if available_languages else "none"
        super().__init__(
            f'No transcript found for this video with language "{language}". '
            f"Available languages: {listing}"
        )


class SubtitleFetchError(TranscriptError):
    """字幕のダウンロードエラー"""

    pass


class SubtitleFileNotFoundError(SubtitleFetchError):
    """ダウンロード後の字幕ファイルが見つからない"""

    def __init__(self, language: str):
        self.language = language
        super().__init__(f'Could not read transcript file for language "{language}"')
