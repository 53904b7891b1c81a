"""Thread Reads — lookups over the Thread Registry, premium access and votes.

Invariants:
    - Read-only: nothing here stages or commits a transaction
    - Unknown thread → 404 via NotFoundError; unknown vote/boost → null body
"""

from fastapi import APIRouter, Depends

from stakethread.core.domain_types import ThreadId
from stakethread.core.errors import NotFoundError
from stakethread.schemas.ledger import (
    BoostResponse, CountResponse, ThreadResponse, VoteResponse,
)
from stakethread.services.ledger_service import LedgerService, get_ledger_service

router = APIRouter(prefix="/api/v1/threads", tags=["threads"])


@router.get("/count", response_model=CountResponse)
async def get_thread_count(service: LedgerService = Depends(get_ledger_service)):
    return CountResponse(count=service.ledger.get_thread_count())


@router.get("/{thread_id}", response_model=ThreadResponse)
async def get_thread(
    thread_id: int, service: LedgerService = Depends(get_ledger_service),
):
    thread = service.ledger.get_thread(thread_id)
    if thread is None:
        raise NotFoundError("Thread", thread_id)
    return ThreadResponse.model_validate(thread)


@router.get("/{thread_id}/boost", response_model=BoostResponse | None)
async def get_thread_boost(
    thread_id: int, service: LedgerService = Depends(get_ledger_service),
):
    boost = service.ledger.get_thread_boost(ThreadId(thread_id))
    return BoostResponse.model_validate(boost) if boost else None


@router.get("/{thread_id}/access/{user}")
async def has_premium_access(
    thread_id: int, user: str, service: LedgerService = Depends(get_ledger_service),
):
    return {
        "thread_id": thread_id,
        "user": user,
        "has_access": service.ledger.has_premium_access(thread_id, user),
    }


@router.get("/{thread_id}/votes/{voter}", response_model=VoteResponse | None)
async def get_user_vote_on_thread(
    thread_id: int, voter: str, service: LedgerService = Depends(get_ledger_service),
):
    vote = service.ledger.get_user_vote_on_thread(thread_id, voter)
    return VoteResponse.model_validate(vote) if vote else None
