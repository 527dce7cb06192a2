"""メインユースケース: 動画ID/URLから字幕を取得して整形"""

from concurrent.futures import ThreadPoolExecutor

from src.application.interfaces.metadata_provider import MetadataProvider
from src.application.interfaces.subtitle_fetcher import SubtitleFetcher
from src.domain.entities import (
    BatchItemError,
    TranscriptRequest,
    TranscriptResult,
)
from src.domain.exceptions import (
    InvalidInputError,
    NoTranscriptFoundError,
    TranscriptError,
    YtdlpNotFoundError,
)
from src.domain.language_matcher import available_languages, select_track
from src.domain.subtitle_parser import parse_cues
from src.domain.video_reference import extract_video_id, normalize_video_url
from src.infrastructure.logging_config import LogContext, get_logger, trace_chain

logger = get_logger(__name__)

DEFAULT_LANGUAGE = "en"


class FetchTranscriptUseCase:
    """
    メインユースケース: 字幕トラックを選択し、タイムスタンプ付きの字幕を返す

    処理フロー:
    1. 動画ID/URLを正規化
    2. メタデータ取得（字幕トラック一覧）
    3. 言語・手動/自動の優先度に従ってトラック選択
    4. 字幕ファイル取得
    5. キューをパースして結果を組み立て
    """

    def __init__(
        self,
        metadata_provider: MetadataProvider,
        subtitle_fetcher: SubtitleFetcher,
    ):
        self.metadata_provider = metadata_provider
        self.subtitle_fetcher = subtitle_fetcher

    @trace_chain(name="fetch_transcript")
    def execute(self, request: TranscriptRequest) -> TranscriptResult:
        """
        単一動画の字幕を取得

        Args:
            request: 字幕取得リクエスト

        Returns:
            TranscriptResult

        Raises:
            InvalidInputError: 動画ID/URLが空
            MetadataFetchError: メタデータ取得失敗
            NoTranscriptFoundError: 対応する言語の字幕がない
            SubtitleFetchError: 字幕ファイル取得失敗
        """
        video_ref = (request.video_ref or "").strip()
        if not video_ref:
            raise InvalidInputError("The video ID/URL parameter is empty.")

        lang = request.lang or DEFAULT_LANGUAGE
        video_url = normalize_video_url(video_ref)
        video_id = extract_video_id(video_ref)
        ctx = LogContext(video_id=video_id, lang=lang)

        logger.info(f"[Transcript] 取得開始: {ctx}")

        info = self.metadata_provider.fetch_metadata(video_url, request.auth)
        logger.debug(
            f"  利用可能な字幕: 手動={list(info.manual_tracks)}, 自動={list(info.auto_tracks)}"
        )

        selection = select_track(
            info.manual_tracks,
            info.auto_tracks,
            lang,
            request.prefer_manual,
        )
        if selection is None:
            logger.info(f"[Transcript] 対応する字幕なし: {ctx}")
            raise NoTranscriptFoundError(
                lang, available_languages(info.manual_tracks, info.auto_tracks)
            )

        if request.prefer_manual and not selection.is_manual:
            logger.info(
                f"[Transcript] 手動字幕がないため自動生成字幕を使用: "
                f"{ctx.update(variant=selection.language_variant_used)}"
            )
        else:
            logger.debug(
                f"  選択: {selection.language_variant_used} ({selection.subtitle_type})"
            )

        raw_text = self.subtitle_fetcher.fetch_subtitle_text(
            video_url,
            selection.language_variant_used,
            selection.is_manual,
            request.auth,
        )
        items = parse_cues(raw_text)

        logger.info(f"[Transcript] 取得成功: {ctx} - {len(items)}アイテム")

        return TranscriptResult.build(
            youtube_id=video_id,
            video_url=video_url,
            language=lang,
            selection=selection,
            items=items,
            output_format=request.output_format,
            metadata=info.metadata if request.include_metadata else None,
        )

    def execute_batch(
        self,
        requests: list[TranscriptRequest],
        continue_on_fail: bool = False,
        max_workers: int = 1,
    ) -> list[TranscriptResult | BatchItemError]:
        """
        複数動画の字幕を取得

        各リクエストは独立して処理される。結果は入力順。

        Args:
            requests: 字幕取得リクエストのリスト
            continue_on_fail: Trueなら失敗したアイテムを BatchItemError にして続行
            max_workers: 並列数（1なら逐次処理）

        Returns:
            TranscriptResult または BatchItemError のリスト

        Raises:
            Exception: continue_on_fail=False でいずれかのアイテムが失敗（例外はそのまま送出）
            YtdlpNotFoundError: yt-dlp が見つからない（continue_on_fail に関わらず中断）
        """
        if max_workers <= 1:
            return [
                self._execute_item(request, continue_on_fail) for request in requests
            ]

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(self._execute_item, request, continue_on_fail)
                for request in requests
            ]
            return [future.result() for future in futures]

    def _execute_item(
        self,
        request: TranscriptRequest,
        continue_on_fail: bool,
    ) -> TranscriptResult | BatchItemError:
        try:
            return self.execute(request)
        except YtdlpNotFoundError:
            raise
        except TranscriptError as e:
            if not continue_on_fail:
                raise
            logger.warning(f"[Transcript] スキップ: {request.video_ref!r} - {e}")
            return BatchItemError(error=str(e), video_ref=request.video_ref)
        except Exception as e:
            # 想定外のエラー（文字コード・ファイルI/O等）もアイテム単位で扱う
            if not continue_on_fail:
                raise
            logger.warning(
                f"[Transcript] スキップ（想定外のエラー）: {request.video_ref!r} - {e}",
                exc_info=True,
            )
            return BatchItemError(error=str(e), video_ref=request.video_ref)
