# devto_publisher/devto/api.py
"""
api.py

Handles requests to the dev.to (Forem) articles API.

Dependencies:
    - requests
    - pydantic (response models in .schemas)

Input: API key, article payloads built by core.payload_builder
Output: validated API responses (Article, User)
"""
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar
from urllib.parse import urlencode

import requests
from pydantic import BaseModel, ValidationError

from ..core.payload_builder import wrap_article
from .schemas import Article, User

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://dev.to/api"
DEFAULT_TIMEOUT = 30

ModelT = TypeVar("ModelT", bound=BaseModel)


class DevAPIError(RuntimeError):
    """Raised when a dev.to API call fails or returns an unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _check_response(response: requests.Response) -> Any:
    """Helper to check response status and decode JSON, handling errors."""
    request_url = response.request.url if response.request else "Unknown URL"
    try:
        response.raise_for_status()  # Check for HTTP errors
    except requests.exceptions.HTTPError as e:
        status = response.status_code
        logger.error(f"dev.to API error ({request_url}): {status} - {response.text}")
        raise DevAPIError(f"dev.to API error ({request_url}): {status} - {response.text}", status_code=status) from e

    try:
        return response.json()
    except ValueError as e:  # requests' JSONDecodeError is a ValueError
        logger.error(f"Failed to decode JSON response from {request_url}: {response.text}")
        raise DevAPIError(f"Invalid response from {request_url}: {response.text}") from e


def _validate(model: Type[ModelT], data: Any, context: str) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"Unexpected {model.__name__} payload from {context}: {data}")
        raise DevAPIError(f"dev.to API returned an invalid {model.__name__} for {context}") from e


class DevAPI:
    """
    Thin client for the dev.to articles endpoints.

    Args:
        api_key: dev.to API key, sent in the ``api-key`` header.
        base_url: API root (defaults to production).
        session: Optional pre-built requests session (one is created otherwise).
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def __enter__(self) -> "DevAPI":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    def update_api_key(self, api_key: str) -> None:
        self._api_key = api_key

    # --- Request plumbing ---

    def _build_url(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        url = f"{self.base_url}{path}"
        if params:
            url += f"?{urlencode(params)}"
        return url

    def _headers(self) -> Dict[str, str]:
        return {"api-key": self._api_key or "", "Accept": "application/json"}

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        if not self.has_api_key:
            logger.error("Missing dev.to API key.")
            raise ValueError("dev.to API key must be provided.")

        url = self._build_url(path, params)
        logger.debug(f"{method} {url}")
        try:
            response = self._session.request(
                method, url, headers=self._headers(), json=payload, timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Request timed out: {url}")
            raise DevAPIError(f"Request timed out: {url}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error during API call to {url}: {e}", exc_info=True)
            raise DevAPIError(f"Network error during API call to {url}") from e

        return _check_response(response)

    # --- Endpoints ---

    def user(self) -> User:
        """Returns the account the API key belongs to."""
        data = self._request("GET", "/users/me")
        return _validate(User, data, "/users/me")

    def _list_page(self, page: int) -> List[Article]:
        data = self._request("GET", "/articles/me/all", params={"page": page})
        if not isinstance(data, list):
            raise DevAPIError(f"dev.to API returned a non-list page {page} of articles: {data}")
        return [_validate(Article, item, f"/articles/me/all page {page}") for item in data]

    def list_articles(self) -> List[Article]:
        """Lists every article of the user, walking pages until an empty one."""
        articles: List[Article] = []
        page = 1
        while True:
            batch = self._list_page(page)
            if not batch:
                break
            articles.extend(batch)
            page += 1
        logger.info(f"Fetched {len(articles)} article(s) over {page - 1} page(s).")
        return articles

    def get(self, article_id: int) -> Article:
        data = self._request("GET", f"/articles/{article_id}")
        return _validate(Article, data, f"/articles/{article_id}")

    def create(self, article_data: Dict[str, Any]) -> Article:
        """
        Creates a new article.

        Args:
            article_data: Dictionary from core.payload_builder.build_article_payload.

        Returns:
            The created article as returned by the API.
        """
        logger.info(f"Creating article '{article_data.get('title')}' on dev.to...")
        data = self._request("POST", "/articles", payload=wrap_article(article_data))
        article = _validate(Article, data, "/articles")
        logger.info(f"Successfully created article. ID: {article.id}")
        return article

    def update(self, article_id: int, article_data: Dict[str, Any]) -> Article:
        """Replaces an existing article's content and metadata."""
        logger.info(f"Updating article {article_id} ('{article_data.get('title')}') on dev.to...")
        data = self._request("PUT", f"/articles/{article_id}", payload=wrap_article(article_data))
        article = _validate(Article, data, f"/articles/{article_id}")
        logger.info(f"Successfully updated article {article_id}.")
        return article
