# storefront/services/embedding_client.py
from typing import List

import requests
from requests import RequestException

from storefront.utils.retry import http_retry
from storefront.utils.settings import EMBEDDING_URL, EMBEDDING_MODEL, EMBEDDING_TIMEOUT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class EmbeddingClient:
    """Klient embedding service (API w stylu ollama /api/embeddings)."""

    def __init__(self, url: str | None = None, model: str | None = None, timeout: float | None = None):
        self.url = url or EMBEDDING_URL
        self.model = model or EMBEDDING_MODEL
        self.timeout = timeout or EMBEDDING_TIMEOUT

    @http_retry()
    def _request_embedding(self, text: str) -> dict:
        logger.info(f"EmbeddingClient POST {self.url} model={self.model}")
        resp = requests.post(
            self.url,
            json={"model": self.model, "prompt": text},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()

    def embed(self, text: str) -> List[float] | None:
        """Zwraca wektor albo None gdy serwis jest niedostepny."""
        try:
            data = self._request_embedding(text)
        except (RequestException, ValueError) as e:
            logger.error(f"Error generating embedding: {e}")
            return None

        embedding = data.get("embedding") if isinstance(data, dict) else None
        if not embedding:
            logger.warning("Embedding service returned no embedding")
            return None
        try:
            return [float(x) for x in embedding]
        except (TypeError, ValueError) as e:
            logger.error(f"Embedding service returned a malformed vector: {e}")
            return None
