"""Pydantic response models (DTOs) for FastAPI endpoints."""

from pydantic import BaseModel, Field

from models.article_response import ArticleResponse


class GenerateRequestDTO(BaseModel):
    """Documented request shape; the route validates the raw body itself."""

    topic: str = Field(..., min_length=1, examples=["Local elections"])


class GenerateResponseDTO(BaseModel):
    article: str

    @classmethod
    def from_article_response(cls, ar: ArticleResponse) -> "GenerateResponseDTO":
        return cls(article=ar.article or "")


class ErrorResponseDTO(BaseModel):
    error: str

    @classmethod
    def from_article_response(cls, ar: ArticleResponse) -> "ErrorResponseDTO":
        return cls(error=ar.error.message)


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
    model: str | None = None
    search_provider: str | None = None
