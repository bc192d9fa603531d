from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class PipelineStage(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    QUERIED = "queried"
    DRAFTED = "drafted"
    REFINED = "refined"
    RESPONDED = "responded"
    ERROR = "error"


# code -> HTTP status classification
ERROR_STATUS = {
    "bad_request": 400,
    "config": 500,
    "generation_failed": 500,
    "internal": 500,
}

GENERIC_ERROR_MESSAGE = "Internal server error"


@dataclass(frozen=True)
class PipelineError:
    code: str
    message: str
    stage: PipelineStage | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.code not in ERROR_STATUS:
            object.__setattr__(self, "code", "internal")
        if not (self.message or "").strip():
            object.__setattr__(self, "message", GENERIC_ERROR_MESSAGE)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS[self.code]


@dataclass(frozen=True)
class ArticleResponse:
    """Outcome of one pipeline run: exactly one of ``article`` / ``error`` is set."""

    request_id: str
    article: str | None = None
    error: PipelineError | None = None
    stage: PipelineStage = PipelineStage.RESPONDED
    queries: list[str] = field(default_factory=list)
    source_count: int = 0
    latency_ms: int = 0
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    )

    def __post_init__(self):
        if (self.article is None) == (self.error is None):
            raise ValueError("ArticleResponse needs exactly one of article or error")

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def status_code(self) -> int:
        return 200 if self.error is None else self.error.status_code

    def to_body(self) -> dict[str, str]:
        """Public response body: {"article": ...} or {"error": ...}."""
        if self.error is not None:
            return {"error": self.error.message}
        return {"article": self.article or ""}

