"""YouTube動画ID / URL の正規化"""

import re

YOUTUBE_DOMAINS = ("youtube.com", "youtu.be")
WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

_VIDEO_ID_PATTERN = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([a-zA-Z0-9_-]+)")


def _is_youtube_url(ref: str) -> bool:
    return any(domain in ref for domain in YOUTUBE_DOMAINS)


def normalize_video_url(ref: str) -> str:
    """動画IDならwatch URLに変換、URLならそのまま返す"""
    if _is_youtube_url(ref):
        return ref
    return WATCH_URL.format(video_id=ref)


def extract_video_id(ref: str) -> str:
    """
    URLから動画IDを抽出

    watch?v=<id> と youtu.be/<id> の2形式に対応。
    抽出できない場合や、IDが直接渡された場合は入力をそのまま返す。
    """
    if _is_youtube_url(ref):
        match = _VIDEO_ID_PATTERN.search(ref)
        return match.group(1) if match else ref
    return ref
