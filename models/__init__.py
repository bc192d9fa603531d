"""
Models package for pipeline response objects.
"""

from .article_response import ArticleResponse, PipelineError, PipelineStage

__all__ = ["ArticleResponse", "PipelineError", "PipelineStage"]
