"""Transactions — the single write endpoint of the ledger.

Invariants:
    - Body is a TransactionEnvelope validated by Pydantic before reaching the handler
    - Protocol aborts surface through the global StakeThreadError handler
    - 200 means committed (in memory and, when configured, in the database)
"""

import logging

from fastapi import APIRouter, Depends, status

from stakethread.schemas.actions import TransactionEnvelope, TransactionReceipt
from stakethread.services.ledger_service import LedgerService, get_ledger_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])


@router.post(
    "", response_model=TransactionReceipt, status_code=status.HTTP_200_OK,
)
async def submit_transaction(
    envelope: TransactionEnvelope,
    service: LedgerService = Depends(get_ledger_service),
):
    """Apply one sequenced transaction to the ledger."""
    return await service.submit(envelope)
