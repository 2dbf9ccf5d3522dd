"""Transactions repository adapters.

Transactions are never stored locally: every read goes back to the dataset
source and returns a fresh snapshot.
"""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import ValidationError

from backend.clients.dataset_client import DatasetClient, UpstreamFetchError
from shared.models import ProductTransaction


class TransactionsRepository(Protocol):
    def list_transactions(self) -> list[ProductTransaction]:
        """Return the full, unfiltered transaction dataset."""


def _parse_rows(rows: list[Any]) -> list[ProductTransaction]:
    parsed: list[ProductTransaction] = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise UpstreamFetchError(
                f"Dataset row {index} must be an object, got {type(row).__name__}"
            )
        try:
            parsed.append(ProductTransaction.model_validate(row))
        except ValidationError as exc:
            raise UpstreamFetchError(f"Dataset row {index} is malformed: {exc}") from exc
    return parsed


class InMemoryTransactionsRepository:
    """Fixed dataset used for local runs and tests."""

    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        self._rows: list[dict[str, Any]] = list(rows or [])

    def list_transactions(self) -> list[ProductTransaction]:
        return _parse_rows(self._rows)


class RemoteTransactionsRepository:
    """Repository reading the dataset from the remote JSON endpoint on every call."""

    def __init__(self, client: DatasetClient) -> None:
        self._client = client

    def list_transactions(self) -> list[ProductTransaction]:
        return _parse_rows(self._client.fetch_transactions())
