"""Inbound payment gateway callbacks."""
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from vya_settlement.interfaces.http.deps import get_settlement_service
from vya_settlement.modules.settlement import SettlementService

logger = logging.getLogger(__name__)

router = APIRouter()

TOKEN_HEADER = "asaas-access-token"


@router.post("/asaas", summary="Receber eventos do Asaas")
async def asaas_webhook(
    request: Request,
    service: SettlementService = Depends(get_settlement_service),
) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        logger.warning("Gateway event with unparseable body")
        body = None
    ack = await service.handle_gateway_event(request.headers.get(TOKEN_HEADER), body)
    return ack.to_payload()
