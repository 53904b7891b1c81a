"""User Reads — reputation, stake and native balance per identity.

Invariants:
    - Unknown identities are not errors: reputation reads as all-zero, stake as zero
"""

from fastapi import APIRouter, Depends

from stakethread.schemas.ledger import ReputationResponse, StakeResponse
from stakethread.services.ledger_service import LedgerService, get_ledger_service

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/{principal}/reputation", response_model=ReputationResponse)
async def get_user_reputation(
    principal: str, service: LedgerService = Depends(get_ledger_service),
):
    return ReputationResponse.model_validate(
        service.ledger.get_user_reputation(principal),
    )


@router.get("/{principal}/stake", response_model=StakeResponse)
async def get_stake(
    principal: str, service: LedgerService = Depends(get_ledger_service),
):
    stake = service.ledger.get_stake(principal)
    return StakeResponse(
        principal=principal,
        amount=stake.amount if stake else 0,
        locked_until=stake.locked_until if stake else 0,
        is_staked=service.ledger.is_staked(principal),
    )


@router.get("/{principal}/balance")
async def get_balance(
    principal: str, service: LedgerService = Depends(get_ledger_service),
):
    return {"principal": principal, "balance": service.ledger.get_balance(principal)}
