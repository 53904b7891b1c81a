"""Reply Reads — lookups over the Reply Tree and reply votes."""

from fastapi import APIRouter, Depends

from stakethread.core.errors import NotFoundError
from stakethread.schemas.ledger import CountResponse, ReplyResponse, VoteResponse
from stakethread.services.ledger_service import LedgerService, get_ledger_service

router = APIRouter(prefix="/api/v1/replies", tags=["replies"])


@router.get("/count", response_model=CountResponse)
async def get_reply_count(service: LedgerService = Depends(get_ledger_service)):
    return CountResponse(count=service.ledger.get_reply_count())


@router.get("/{reply_id}", response_model=ReplyResponse)
async def get_reply(
    reply_id: int, service: LedgerService = Depends(get_ledger_service),
):
    reply = service.ledger.get_reply(reply_id)
    if reply is None:
        raise NotFoundError("Reply", reply_id)
    return ReplyResponse.model_validate(reply)


@router.get("/{reply_id}/votes/{voter}", response_model=VoteResponse | None)
async def get_user_vote_on_reply(
    reply_id: int, voter: str, service: LedgerService = Depends(get_ledger_service),
):
    vote = service.ledger.get_user_vote_on_reply(reply_id, voter)
    return VoteResponse.model_validate(vote) if vote else None
