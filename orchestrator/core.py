"""
ArticleOrchestrator - request-level business logic for NewsDesk.

Key guarantees:
- generate() never raises; every outcome is an ArticleResponse
- invalid input and missing credentials are rejected before any network call
- stages run strictly in order: plan -> retrieve -> draft -> refine
"""

import threading
import time
import uuid
from collections.abc import Mapping
from typing import Any, Callable

from api.base_client import BaseAIClient
from api.client_factory import create_ai_client
from config.config import Config
from models.article_response import ArticleResponse, PipelineError, PipelineStage
from orchestrator.drafter import Drafter
from orchestrator.query_planner import QueryPlanner
from orchestrator.refiner import Refiner
from orchestrator.retriever import Retriever
from tools.web import BaseSearchClient, create_search_client
from utils.logger import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[PipelineStage], None]

INVALID_TOPIC_MESSAGE = "A valid topic is required."
INVALID_BODY_MESSAGE = "Request body must be a JSON object."
EMPTY_DRAFT_MESSAGE = "Failed to generate article draft."


class _Run:
    """Per-request bookkeeping: id, current stage, timing, progress fan-out."""

    def __init__(self, progress_callback: ProgressCallback | None):
        self.request_id = str(uuid.uuid4())
        self.stage = PipelineStage.RECEIVED
        self.started = time.time()
        self.queries: list[str] = []
        self.source_count = 0
        self._progress_callback = progress_callback

    @property
    def latency_ms(self) -> int:
        return int((time.time() - self.started) * 1000)

    def advance(self, stage: PipelineStage) -> None:
        self.stage = stage
        logger.info(
            f"Pipeline stage: {stage.value}",
            extra={"extra_fields": {"request_id": self.request_id, "stage": stage.value}},
        )
        if self._progress_callback is None:
            return
        try:
            self._progress_callback(stage)
        except Exception as e:
            logger.warning(
                f"Progress callback failed: {e}",
                extra={"extra_fields": {"request_id": self.request_id, "stage": stage.value}},
            )


class ArticleOrchestrator:
    def __init__(
        self,
        config: Config | None = None,
        ai_client: BaseAIClient | None = None,
        search_client: BaseSearchClient | None = None,
    ):
        self.config = config or Config()
        self._ai_client = ai_client
        self._search_client = search_client
        self._client_lock = threading.Lock()

    # ---------- helpers ----------

    def _get_ai_client(self) -> BaseAIClient:
        with self._client_lock:
            if self._ai_client is None:
                self._ai_client = create_ai_client(self.config)
            return self._ai_client

    def _get_search_client(self) -> BaseSearchClient:
        with self._client_lock:
            if self._search_client is None:
                self._search_client = create_search_client(self.config)
            return self._search_client

    def _error_response(
        self, run: _Run, *, code: str, message: str, details: dict[str, Any] | None = None
    ) -> ArticleResponse:
        failed_stage = run.stage
        run.advance(PipelineStage.ERROR)
        error = PipelineError(code=code, message=message, stage=failed_stage, details=details or {})
        logger.warning(
            "Article request failed",
            extra={
                "extra_fields": {
                    "request_id": run.request_id,
                    "code": error.code,
                    "error": error.message,
                    "failed_stage": failed_stage.value,
                    "latency_ms": run.latency_ms,
                }
            },
        )
        return ArticleResponse(
            request_id=run.request_id,
            error=error,
            stage=PipelineStage.ERROR,
            queries=run.queries,
            source_count=run.source_count,
            latency_ms=run.latency_ms,
        )

    def _config_error(self) -> str | None:
        """Provider checks only apply to clients this orchestrator still has to build."""
        if self._ai_client is None:
            message = self.config.model_type_error()
            if message:
                return message
        message = self.config.credential_error()
        if message:
            return message
        if self._search_client is None:
            return self.config.search_provider_error()
        return None

    @staticmethod
    def _extract_topic(payload: Any) -> tuple[str | None, str | None]:
        """Returns (topic, error_message); exactly one is set."""
        if not isinstance(payload, Mapping):
            return None, INVALID_BODY_MESSAGE
        topic = payload.get("topic")
        if not isinstance(topic, str) or not topic.strip():
            return None, INVALID_TOPIC_MESSAGE
        return topic.strip(), None

    # ---------- public API ----------

    def generate(
        self, payload: Any, progress_callback: ProgressCallback | None = None
    ) -> ArticleResponse:
        """
        Run the full research -> draft -> refine pipeline for one request.

        Args:
            payload: Decoded request body, expected to be {"topic": "<str>"}
            progress_callback: Optional hook called with each PipelineStage transition

        Returns:
            ArticleResponse carrying either the final article or a PipelineError
        """
        run = _Run(progress_callback)
        run.advance(PipelineStage.RECEIVED)

        topic, message = self._extract_topic(payload)
        if message:
            return self._error_response(run, code="bad_request", message=message)

        config_error = self._config_error()
        if config_error:
            return self._error_response(run, code="config", message=config_error)

        run.advance(PipelineStage.VALIDATED)

        try:
            ai_client = self._get_ai_client()
            search_client = self._get_search_client()

            planner = QueryPlanner(ai_client, max_queries=self.config.MAX_QUERIES)
            retriever = Retriever(
                search_client,
                max_results=self.config.MAX_RESULTS_PER_QUERY,
                engine=self.config.SEARCH_ENGINE,
            )

            run.queries = planner.plan(topic)
            research = retriever.retrieve(run.queries, topic)
            run.source_count = len(research)
            run.advance(PipelineStage.QUERIED)

            draft = Drafter(ai_client).draft(topic, research)
            if not draft:
                return self._error_response(run, code="generation_failed", message=EMPTY_DRAFT_MESSAGE)
            run.advance(PipelineStage.DRAFTED)

            article = Refiner(ai_client).refine(draft)
            run.advance(PipelineStage.REFINED)

        except Exception as e:
            logger.error(
                f"Article orchestration error: {e}",
                exc_info=True,
                extra={"extra_fields": {"request_id": run.request_id, "stage": run.stage.value}},
            )
            return self._error_response(
                run,
                code="internal",
                message=str(e),
                details={"error_type": type(e).__name__},
            )

        run.advance(PipelineStage.RESPONDED)
        logger.info(
            "Article generated",
            extra={
                "extra_fields": {
                    "request_id": run.request_id,
                    "queries": len(run.queries),
                    "sources": run.source_count,
                    "chars": len(article),
                    "latency_ms": run.latency_ms,
                }
            },
        )
        return ArticleResponse(
            request_id=run.request_id,
            article=article,
            stage=PipelineStage.RESPONDED,
            queries=run.queries,
            source_count=run.source_count,
            latency_ms=run.latency_ms,
        )
