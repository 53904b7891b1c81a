"""Protocol Reads — current owner-mutable configuration and chain position."""

from fastapi import APIRouter, Depends

from stakethread.schemas.ledger import ProtocolConfigResponse
from stakethread.services.ledger_service import LedgerService, get_ledger_service

router = APIRouter(prefix="/api/v1/protocol", tags=["protocol"])


@router.get("/config", response_model=ProtocolConfigResponse)
async def get_config(service: LedgerService = Depends(get_ledger_service)):
    return ProtocolConfigResponse.model_validate(service.ledger.get_config())


@router.get("/status")
async def get_status(service: LedgerService = Depends(get_ledger_service)):
    state = service.ledger.state
    return {
        "last_block_height": state.last_block_height,
        "thread_count": state.thread_count,
        "reply_count": state.reply_count,
    }
