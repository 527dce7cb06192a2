"""VTT / SRT 字幕のパーサー"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal

from src.domain.entities import TranscriptItem
from src.domain.time_utils import parse_timestamp

CUE_SEPARATOR = " --> "

_TAG_PATTERN = re.compile(r"<[^>]*>")
_MILLISECONDS = Decimal("0.001")


def _round_ms(seconds: float) -> float:
    """小数点以下3桁に丸める（0.0005 は切り上げ、NaN等はそのまま）"""
    if not math.isfinite(seconds):
        return seconds
    if abs(seconds) >= 1e15:
        # この桁ではミリ秒以下の精度がない
        return round(seconds, 3)
    return float(Decimal(seconds).quantize(_MILLISECONDS, rounding=ROUND_HALF_UP))


def clean_cue_text(lines: list[str]) -> str:
    """タグ（<b>, <c>, <00:00:01.000> 等）を除去して1行に結合"""
    cleaned = (_TAG_PATTERN.sub("", line).strip() for line in lines)
    return " ".join(text for text in cleaned if text).strip()


def _split_timing_line(line: str) -> tuple[float, float]:
    """タイミング行から開始・終了秒を取り出す（終了側のキュー設定は無視）"""
    start_raw, end_raw = line.split(CUE_SEPARATOR, 1)
    end_tokens = end_raw.split()
    end_raw = end_tokens[0] if end_tokens else ""
    return parse_timestamp(start_raw.strip()), parse_timestamp(end_raw)


def parse_cues(raw_text: str) -> list[TranscriptItem]:
    """
    字幕テキストをパースして TranscriptItem のリストを返す

    - " --> " を含む行をキューの開始とみなす
    - 続く行を空行または次のタイミング行までテキストとして収集
    - テキストが空になったキュー（スタイルのみ等）はスキップ
    - 開始時刻の順序や重複は検証しない（出現順のまま）

    Args:
        raw_text: VTT または SRT のファイル内容

    Returns:
        TranscriptItem のリスト（start / duration は小数点以下3桁に丸め）
    """
    items: list[TranscriptItem] = []
    lines = raw_text.splitlines()

    i = 0
    while i < len(lines):
        line = lines[i].strip()
        if CUE_SEPARATOR not in line:
            i += 1
            continue

        start, end = _split_timing_line(line)

        i += 1
        text_lines = []
        while i < len(lines) and lines[i].strip() and CUE_SEPARATOR not in lines[i]:
            text_lines.append(lines[i])
            i += 1

        text = clean_cue_text(text_lines)
        if text:
            items.append(
                TranscriptItem(
                    text=text,
                    start=_round_ms(start),
                    duration=_round_ms(end - start),
                )
            )

    return items
