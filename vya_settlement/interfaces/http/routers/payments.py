"""Traveler-facing PIX charge endpoints."""
from fastapi import APIRouter, Depends

from vya_settlement.core.security import get_current_actor
from vya_settlement.interfaces.http.deps import get_settlement_service
from vya_settlement.modules.settlement import SettlementService
from vya_settlement.schemas import (
    GeneratePixRequest,
    GeneratePixResponse,
    PaymentStatusResponse,
    TokenData,
)

router = APIRouter()


@router.post("/generate-pix", response_model=GeneratePixResponse, summary="Gerar cobrança PIX para um pacote")
async def generate_pix(
    payload: GeneratePixRequest,
    actor: TokenData = Depends(get_current_actor),
    service: SettlementService = Depends(get_settlement_service),
) -> GeneratePixResponse:
    charge = await service.initiate_charge(actor.actor_id, payload.package_id, payload.trip_id)
    return GeneratePixResponse(
        package_id=charge.package_id,
        pix_qr_code=charge.qr_image,
        pix_copy_paste=charge.copy_paste_code,
        expires_at=charge.expires_at,
        amount=float(charge.amount),
    )


@router.get("/{package_id}", response_model=PaymentStatusResponse, summary="Consultar pagamento do pacote")
async def get_payment_status(
    package_id: str,
    actor: TokenData = Depends(get_current_actor),
    service: SettlementService = Depends(get_settlement_service),
) -> PaymentStatusResponse:
    state = await service.payment_status(actor.actor_id, package_id)
    return PaymentStatusResponse(
        package_id=state.package_id,
        status=state.status,
        amount=float(state.amount),
        pix_qr_code=state.pix_qr_code,
        pix_copy_paste=state.pix_copy_paste,
        expires_at=state.expires_at,
        expired=state.expired,
    )
