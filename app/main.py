"""Streamlit アプリケーションエントリーポイント"""

import json
import os
import sys
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# .envファイルを最初に読み込む（LangSmith等の環境変数を設定するため）
from dotenv import load_dotenv
load_dotenv(project_root / ".env")

import streamlit as st

from config.settings import get_settings
from src.application.usecases.fetch_transcript import FetchTranscriptUseCase
from src.domain.entities import (
    AuthContext,
    AuthMethod,
    BatchItemError,
    OutputFormat,
    TranscriptRequest,
    TranscriptResult,
)
from src.domain.exceptions import (
    NoTranscriptFoundError,
    TranscriptError,
    YtdlpNotFoundError,
)
from src.infrastructure.factory import build_usecase
from src.infrastructure.logging_config import (
    get_logger,
    is_langsmith_enabled,
    level_from_name,
    setup_logging,
)

# ロギング初期化
setup_logging(level=level_from_name(os.getenv("LOG_LEVEL", "INFO")))

logger = get_logger(__name__)

OUTPUT_FORMAT_LABELS = {
    OutputFormat.STRUCTURED: "タイムスタンプ付き",
    OutputFormat.PLAIN_TEXT: "テキストのみ",
    OutputFormat.BOTH: "両方",
}

AUTH_METHOD_LABELS = {
    AuthMethod.NONE: "なし（公開動画）",
    AuthMethod.COOKIE_STRING: "クッキー文字列",
    AuthMethod.COOKIE_FILE: "クッキーファイル",
}


@st.cache_resource
def init_usecase() -> FetchTranscriptUseCase:
    """DIでユースケースを組み立て"""
    return build_usecase(get_settings())


def format_time(seconds: float) -> str:
    """秒をMM:SS形式に変換"""
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


def render_auth_inputs() -> AuthContext:
    """サイドバーに認証設定を表示"""
    default_auth = get_settings().auth_context()
    methods = list(AuthMethod)
    method = st.selectbox(
        "認証方式",
        methods,
        index=methods.index(default_auth.method),
        format_func=lambda m: AUTH_METHOD_LABELS[m],
        help="限定公開・年齢制限のある動画ではクッキーが必要です。",
    )

    cookie_string = None
    cookie_file = None
    if method == AuthMethod.COOKIE_STRING:
        cookie_string = st.text_area(
            "クッキー文字列",
            value=default_auth.cookie_string or "",
            help="ブラウザからエクスポートしたNetscape形式のクッキー",
        )
    elif method == AuthMethod.COOKIE_FILE:
        cookie_file = st.text_input(
            "クッキーファイルのパス",
            value=default_auth.cookie_file or "",
            placeholder="/path/to/cookies.txt",
        )

    return AuthContext(
        method=method,
        cookie_string=cookie_string,
        cookie_file=cookie_file,
    )


def render_result(result: TranscriptResult, key_suffix: str = "") -> None:
    """取得結果を表示（key_suffix はバッチ表示時のウィジェットキー重複回避用）"""
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("動画ID", result.youtube_id)
    with col2:
        st.metric("字幕の種類", "手動" if result.subtitle_type == "manual" else "自動生成")
    with col3:
        st.metric("アイテム数", f"{result.transcript_length}件")

    if result.metadata is not None:
        with st.expander("📋 メタデータ", expanded=False):
            st.json(result.metadata.to_dict())

    if result.transcript is not None:
        st.markdown("### ⏱️ タイムスタンプ付き字幕")
        st.dataframe(
            [
                {
                    "開始": format_time(item.start),
                    "終了": format_time(item.end),
                    "長さ(秒)": item.duration,
                    "テキスト": item.text,
                }
                for item in result.transcript
            ],
            use_container_width=True,
            hide_index=True,
        )

    if result.transcript_text is not None:
        st.markdown("### 📝 テキスト")
        st.text_area(
            "transcript_text",
            result.transcript_text,
            height=300,
            label_visibility="collapsed",
            key=f"text_{result.youtube_id}{key_suffix}",
        )

    st.download_button(
        "💾 JSONをダウンロード",
        data=_to_json(result),
        file_name=f"{result.youtube_id}_{result.language}.json",
        mime="application/json",
        key=f"download_{result.youtube_id}{key_suffix}",
    )


def _to_json(result: TranscriptResult) -> str:
    return json.dumps(result.to_dict(), ensure_ascii=False, indent=2)


def run_fetch(request: TranscriptRequest) -> None:
    """字幕取得を実行して表示"""
    logger.info(f"[APP] 字幕取得: {request.video_ref!r} lang={request.lang}")
    try:
        with st.spinner("字幕を取得中..."):
            result = init_usecase().execute(request)
    except YtdlpNotFoundError as e:
        logger.error(f"[APP] yt-dlp エラー: {e}")
        st.error(f"{e}\n\n設定 YTDLP_PATH を確認してください。")
        return
    except NoTranscriptFoundError as e:
        st.warning(str(e))
        return
    except TranscriptError as e:
        logger.error(f"[APP] エラー発生: {e}", exc_info=True)
        st.error(f"エラーが発生しました: {e}")
        return

    render_result(result)


def run_batch(requests: list[TranscriptRequest]) -> None:
    """複数動画の字幕を取得して表示"""
    settings = get_settings()
    logger.info(f"[APP] バッチ取得: {len(requests)}件")
    try:
        with st.spinner(f"{len(requests)}件の字幕を取得中..."):
            results = init_usecase().execute_batch(
                requests,
                continue_on_fail=settings.CONTINUE_ON_FAIL,
                max_workers=settings.BATCH_MAX_WORKERS,
            )
    except TranscriptError as e:
        logger.error(f"[APP] バッチ中断: {e}")
        st.error(f"処理を中断しました: {e}")
        return

    for i, result in enumerate(results, 1):
        if isinstance(result, BatchItemError):
            with st.expander(f"❌ {i}. {result.video_ref}", expanded=False):
                st.error(result.error)
            continue
        with st.expander(f"✅ {i}. {result.youtube_id}", expanded=(i == 1)):
            render_result(result, key_suffix=f"_{i}")


def main() -> None:
    """Streamlitアプリケーションのメイン関数"""
    st.set_page_config(
        page_title="YTranscript",
        page_icon="🎬",
        layout="wide",
    )
    settings = get_settings()

    with st.sidebar:
        if is_langsmith_enabled():
            st.success(f"🔍 LangSmith: 有効 (project: {settings.LANGSMITH_PROJECT})")
        else:
            st.info("🔍 LangSmith: 無効")

        st.header("⚙️ 設定")
        prefer_manual = st.checkbox(
            "手動字幕を優先",
            value=settings.PREFER_MANUAL,
            help="手動字幕がない場合は自動生成字幕を使用します。",
        )
        formats = list(OutputFormat)
        output_format = st.radio(
            "出力形式",
            formats,
            index=formats.index(settings.OUTPUT_FORMAT),
            format_func=lambda f: OUTPUT_FORMAT_LABELS[f],
        )
        include_metadata = st.checkbox(
            "メタデータを含める",
            value=settings.INCLUDE_METADATA,
        )
        auth = render_auth_inputs()

    st.title("🎬 YTranscript")
    st.markdown("YouTube動画の字幕をタイムスタンプ付きで取得")

    with st.form("transcript_form"):
        video_refs_raw = st.text_area(
            "🔗 動画ID / URL（1行に1つ）",
            placeholder="dQw4w9WgXcQ または https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            height=100,
        )
        lang = st.text_input(
            "🌐 言語コード",
            value=settings.DEFAULT_LANGUAGE,
            placeholder="en, ja, vi, fr ...",
        )
        submitted = st.form_submit_button("📥 取得", use_container_width=True)

    if submitted:
        video_refs = [line.strip() for line in video_refs_raw.splitlines() if line.strip()]
        if not video_refs:
            st.warning("動画ID / URLを入力してください。")
            return

        requests = [
            TranscriptRequest(
                video_ref=video_ref,
                lang=lang.strip() or settings.DEFAULT_LANGUAGE,
                prefer_manual=prefer_manual,
                output_format=output_format,
                include_metadata=include_metadata,
                auth=auth,
            )
            for video_ref in video_refs
        ]
        if len(requests) == 1:
            run_fetch(requests[0])
        else:
            run_batch(requests)


if __name__ == "__main__":
    main()
