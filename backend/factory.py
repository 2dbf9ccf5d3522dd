"""Composition root for backend services."""

from __future__ import annotations

from backend.clients.dataset_client import DatasetClient, DatasetSettings
from backend.repositories.transactions_repository import RemoteTransactionsRepository
from backend.services.transaction_service import TransactionService
from shared import config


def build_transaction_service() -> TransactionService:
    """Build the transaction service over the configured remote dataset."""

    client = DatasetClient(
        settings=DatasetSettings(
            url=config.dataset_url(),
            timeout_seconds=config.dataset_timeout_seconds(),
        )
    )
    return TransactionService(repository=RemoteTransactionsRepository(client=client))
