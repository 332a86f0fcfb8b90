"""Reads catalog documents from local files or HTTP(S) URLs."""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from related_content.exceptions import CatalogError

logger = logging.getLogger(__name__)


def _is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class CatalogFetcher:
    """Fetches and parses catalog documents (YAML or JSON)."""

    def __init__(self, timeout: float = 30.0, transport: httpx.BaseTransport | None = None):
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "CatalogFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def fetch(self, source: str) -> dict[str, Any]:
        """Fetch a catalog document and return its top-level mapping.

        Args:
            source: Local file path or http(s) URL

        Returns:
            Parsed document (empty dict for an empty document)

        Raises:
            CatalogError: If the source can't be read or parsed
        """
        if _is_remote(source):
            text = self._fetch_remote(source)
        else:
            text = self._read_local(source)

        document = self._parse(source, text)
        logger.debug(f"Fetched catalog document from {source}")
        return document

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    def _get(self, url: str) -> httpx.Response:
        return self._client.get(url)

    def _fetch_remote(self, url: str) -> str:
        try:
            response = self._get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise CatalogError(f"Failed to fetch catalog {url}: {e}", source=url) from e
        return response.text

    def _read_local(self, source: str) -> str:
        path = Path(source).expanduser()
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogError(f"Failed to read catalog {path}: {e}", source=source) from e

    def _parse(self, source: str, text: str) -> dict[str, Any]:
        try:
            if source.lower().split("?", 1)[0].endswith(".json"):
                data = json.loads(text) if text.strip() else {}
            else:
                # YAML is a superset of JSON, so unknown extensions go through here
                data = yaml.safe_load(text) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise CatalogError(f"Failed to parse catalog {source}: {e}", source=source) from e

        if not isinstance(data, dict):
            raise CatalogError(
                f"Catalog {source} must contain a mapping, got {type(data).__name__}",
                source=source,
            )
        return data
