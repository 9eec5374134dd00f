"""
schemas.py

Pydantic models for validating dev.to API responses.
"""
# devto_publisher/devto/schemas.py
from pydantic import BaseModel, ConfigDict
from typing import Optional


class DevToModel(BaseModel):
    """Base model: the API returns many more fields than we use."""
    model_config = ConfigDict(extra="ignore")


class User(DevToModel):
    """Response for users/me API."""
    id: int
    username: str
    name: str


class Article(DevToModel):
    """Response for the articles APIs (single article or list entry)."""
    id: Optional[int] = None
    title: str
    body_markdown: Optional[str] = None
    published: Optional[bool] = None
    url: Optional[str] = None
    published_at: Optional[str] = None
    comments_count: Optional[int] = None
    positive_reactions_count: Optional[int] = None
