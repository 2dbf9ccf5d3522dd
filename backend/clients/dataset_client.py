"""HTTP client fetching the remote product transactions dataset."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any
from http.client import HTTPException
from urllib.error import HTTPError
from urllib.request import Request, urlopen


logger = logging.getLogger(__name__)


class UpstreamFetchError(RuntimeError):
    """Raised when the dataset cannot be fetched or decoded."""


@dataclass(slots=True)
class DatasetSettings:
    url: str
    timeout_seconds: float = 10.0


class DatasetClient:
    def __init__(self, settings: DatasetSettings) -> None:
        self.settings = settings

    def fetch_transactions(self) -> list[Any]:
        """Fetch the whole dataset and return the decoded JSON array."""

        request = Request(
            url=self.settings.url,
            headers={"Accept": "application/json"},
            method="GET",
        )
        try:
            with urlopen(request, timeout=self.settings.timeout_seconds) as response:  # noqa: S310 - URL comes from trusted env config
                raw_body = response.read()
        except HTTPError as exc:
            body = exc.read().decode("utf-8", errors="replace")[:500] if exc.fp is not None else ""
            raise UpstreamFetchError(
                f"Dataset request failed with status {exc.code}: {body}"
            ) from exc
        except (OSError, HTTPException) as exc:
            raise UpstreamFetchError(f"Dataset request failed: {exc}") from exc

        try:
            rows = json.loads(raw_body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise UpstreamFetchError("Dataset response is not valid JSON") from exc

        if not isinstance(rows, list):
            raise UpstreamFetchError(
                f"Dataset response must be a JSON array, got {type(rows).__name__}"
            )

        logger.info("dataset_fetched url=%s rows=%s", self.settings.url, len(rows))
        return rows
