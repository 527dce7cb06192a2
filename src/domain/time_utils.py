"""時間変換ユーティリティ"""

import math
import re

# 先頭の数値部分（parseFloat 相当）
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _to_number(value: str) -> float:
    """時・分フィールドを数値化（数値でなければ0）"""
    try:
        number = float(value.strip()) if value.strip() else 0.0
    except ValueError:
        return 0.0
    return 0.0 if math.isnan(number) else number


def _parse_seconds(value: str) -> float:
    """秒フィールドを先頭の数値部分でパース（数値がなければNaN）"""
    match = _LEADING_FLOAT.match(value.replace(",", "."))
    if not match:
        return math.nan
    return float(match.group(1))


def parse_timestamp(raw: str) -> float:
    """
    字幕のタイムスタンプを秒に変換

    "HH:MM:SS.mmm" / "MM:SS.mmm" / "SS.mmm" 形式に対応。
    SRT のカンマ区切り（00:00:01,500）も受け付ける。
    不正な入力でも例外は投げず、秒フィールドが読めない場合は NaN を返す。

    Args:
        raw: タイムスタンプ文字列

    Returns:
        秒（float）

    Example:
        parse_timestamp("01:02:03.500")  # → 3723.5
        parse_timestamp("02:03.250")     # → 123.25
    """
    parts = raw.split(":")
    if len(parts) == 3:
        h, m, s = parts
        return _to_number(h) * 3600 + _to_number(m) * 60 + _parse_seconds(s)
    if len(parts) == 2:
        m, s = parts
        return _to_number(m) * 60 + _parse_seconds(s)
    return _parse_seconds(raw)
