"""
Wallet API endpoints.

Module errors are not caught here; the application's error handler turns
them into ``{"error": ..., "code": ...}`` responses with the right status.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_wallet_service
from api.middleware.auth import get_current_user, get_resolved_session
from modules.auth.models import ResolvedSession
from shared.models import AuthenticatedUser

from .interfaces import IWalletService
from .models import (
    CreateUserRequest,
    CreateUserResponse,
    SendTransactionResponse,
    SignMessageResponse,
    WalletResponse,
)

router = APIRouter()


@router.post("/create-privy-user", response_model=CreateUserResponse)
async def create_privy_user(
    request: Optional[CreateUserRequest] = None,
    service: IWalletService = Depends(get_wallet_service),
) -> CreateUserResponse:
    """
    Create a Privy user linked to a Supabase subject, with one wallet.

    An empty body is treated as a missing subject. Not idempotent: calling
    twice for the same subject leaves the outcome to Privy.
    """
    request = request or CreateUserRequest()
    user = await service.create_user(request.sub, request.email)
    return CreateUserResponse(privy_user=user)


@router.post("/sign-message", response_model=SignMessageResponse)
async def sign_message(
    session: ResolvedSession = Depends(get_resolved_session),
    service: IWalletService = Depends(get_wallet_service),
) -> SignMessageResponse:
    """Sign "hello world" with the caller's embedded wallet."""
    signed = await service.sign_message(session)
    return SignMessageResponse(
        message=signed.message,
        signature=signed.signature,
        wallet_address=signed.wallet_address,
    )


@router.post("/send-transaction", response_model=SendTransactionResponse)
async def send_transaction(
    session: ResolvedSession = Depends(get_resolved_session),
    service: IWalletService = Depends(get_wallet_service),
) -> SendTransactionResponse:
    """
    Send a sponsored 0 ETH transaction to the zero address on Base Sepolia.

    Returns once Privy accepts the transaction; inclusion is not awaited.
    """
    receipt = await service.send_transaction(session)
    return SendTransactionResponse(
        transaction_hash=receipt.transaction_hash,
        wallet_address=receipt.wallet_address,
        chain=receipt.chain,
    )


@router.get("/wallet", response_model=WalletResponse)
async def get_wallet(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IWalletService = Depends(get_wallet_service),
) -> WalletResponse:
    """Get the caller's embedded wallet."""
    wallet = await service.find_wallet(user.id)
    return WalletResponse(
        wallet_id=wallet.id,
        wallet_address=wallet.address,
        chain_type=wallet.chain_type,
    )
