"""Read-only client for the Firestore REST document listing."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from review_advisor.config import Settings, get_settings
from review_advisor.errors import RetrievalFailed
from review_advisor.reviews.models import ReviewDocument

logger = logging.getLogger(__name__)


class FirestoreClient:
    """
    Lists the review documents stored under one restaurant.

    USAGE:
        with FirestoreClient(settings) as store:
            documents = store.list_reviews("restaurant-123")
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=self.settings.store_timeout_seconds
        )

    def reviews_url(self, restaurant_id: str) -> str:
        s = self.settings
        return (
            f"{s.firestore_base_url.rstrip('/')}/projects/{s.firestore_project_id}"
            f"/databases/{s.firestore_database}/documents/{s.restaurants_collection}"
            f"/{quote(restaurant_id, safe='')}/{s.reviews_collection}"
        )

    def list_reviews(self, restaurant_id: str) -> List[ReviewDocument]:
        """
        Fetch every review document of a restaurant, following pagination.

        Args:
            restaurant_id: Restaurant document id

        Returns:
            Review documents in store order; empty when the store has none

        Raises:
            RetrievalFailed: On non-200 status, transport error or malformed body
        """
        url = self.reviews_url(restaurant_id)
        documents: List[ReviewDocument] = []
        page_token: Optional[str] = None

        while True:
            root = self._get_page(url, page_token)
            raw_documents = root.get("documents")
            if isinstance(raw_documents, list):
                documents.extend(
                    ReviewDocument.from_json(node)
                    for node in raw_documents
                    if isinstance(node, dict)
                )
            page_token = root.get("nextPageToken")
            if not page_token:
                break

        logger.info(f"Fetched {len(documents)} reviews for restaurant {restaurant_id}")
        return documents

    def _get_page(self, url: str, page_token: Optional[str]) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if self.settings.firestore_page_size:
            params["pageSize"] = self.settings.firestore_page_size
        if page_token:
            params["pageToken"] = page_token

        try:
            response = self._client.get(
                url, params=params, headers={"Accept": "application/json"}
            )
        except httpx.HTTPError as exc:
            logger.error(f"Document store request failed: {exc}")
            raise RetrievalFailed(None, str(exc)) from exc

        if response.status_code != 200:
            logger.error(f"Document store returned HTTP {response.status_code}")
            raise RetrievalFailed(response.status_code, response.text)

        try:
            root = response.json()
        except ValueError as exc:
            raise RetrievalFailed(response.status_code, f"invalid JSON: {exc}") from exc
        if not isinstance(root, dict):
            raise RetrievalFailed(response.status_code, "expected a JSON object")
        return root

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "FirestoreClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
