"""
Pydantic models for the API.

Response models shared across route modules.
"""

from pydantic import BaseModel, Field
from typing import List


class TranslationResponse(BaseModel):
    """A translation served from the cache or an engine"""
    word: str = Field(..., description="Source word, as given in the path")
    language: str = Field(..., description="Target language code")
    translation: str = Field(..., description="Translated text")


class ErrorResponse(BaseModel):
    """Error body for client-visible failures"""
    detail: str


class NotFoundResponse(ErrorResponse):
    """No engine could translate the word"""
    word: str
    language: str


class EnginesResponse(BaseModel):
    """Engine catalog in fallback order"""
    engines: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Service health"""
    status: str = Field(..., description="healthy | degraded")
    version: str
    cache_backend: str = Field(..., description="redis | memory")
    cache_reachable: bool
    engines: int
    timestamp: float
