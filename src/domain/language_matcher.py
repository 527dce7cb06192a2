"""字幕トラックの言語選択"""

from src.domain.entities import SelectionResult, TrackMap

# 地域付きコードの表記ゆれ（en_US / en-US / en.US）
REGION_SUFFIXES = ("_US", "-US", ".US")


def language_variants(lang: str) -> list[str]:
    """試行する言語コードを優先順に返す"""
    return [lang] + [f"{lang}{suffix}" for suffix in REGION_SUFFIXES]


def _has_tracks(tracks: TrackMap, lang: str) -> bool:
    return bool(tracks.get(lang))


def select_track(
    manual_tracks: TrackMap,
    auto_tracks: TrackMap,
    lang: str,
    prefer_manual: bool = True,
) -> SelectionResult | None:
    """
    最適な字幕トラックを選択

    1回目: 手動字幕の優先設定に従って探す
    2回目: 優先設定を無視して、いずれかの字幕がある最初の言語コードを選ぶ
           （同じコードに手動・自動の両方があれば手動）

    2回目のフォールバックにより、手動字幕を優先していても自動生成字幕が
    返ることがある。

    Args:
        manual_tracks: 手動字幕（言語コード → トラック）
        auto_tracks: 自動生成字幕（言語コード → トラック）
        lang: リクエストされた言語コード
        prefer_manual: 手動字幕を優先するか

    Returns:
        SelectionResult、見つからない場合はNone
    """
    variants = language_variants(lang)

    for variant in variants:
        has_manual = _has_tracks(manual_tracks, variant)
        if prefer_manual:
            if has_manual:
                return SelectionResult(language_variant_used=variant, is_manual=True)
        elif has_manual or _has_tracks(auto_tracks, variant):
            return SelectionResult(language_variant_used=variant, is_manual=has_manual)

    # フォールバック
    for variant in variants:
        has_manual = _has_tracks(manual_tracks, variant)
        if has_manual or _has_tracks(auto_tracks, variant):
            return SelectionResult(language_variant_used=variant, is_manual=has_manual)

    return None


def available_languages(manual_tracks: TrackMap, auto_tracks: TrackMap) -> list[str]:
    """利用可能な言語コード（手動 → 自動の順、重複はそのまま）"""
    return [*manual_tracks.keys(), *auto_tracks.keys()]
