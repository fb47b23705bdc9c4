"""Asaas implementation of the payment gateway adapter.

Docs: https://docs.asaas.com/reference
"""

from __future__ import annotations

import logging
import re
from datetime import date
from decimal import Decimal
from typing import Any, Optional

import httpx

from vya_settlement.core.cache import TTLCache
from vya_settlement.core.config import AsaasSettings
from vya_settlement.core.exceptions import UpstreamGatewayError

from .base import PixQrCode, TransferReceipt

logger = logging.getLogger(__name__)

CUSTOMER_CACHE_PREFIX = "customer:"


def only_digits(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def _rejects_customer(exc: UpstreamGatewayError) -> bool:
    # deleted customers answer 404, unknown ids answer 400 invalid_customer
    return exc.http_status == 404 or (exc.http_status == 400 and "invalid_customer" in (exc.body or ""))


class AsaasGateway:
    def __init__(
        self,
        settings: AsaasSettings,
        *,
        cache: Optional[TTLCache] = None,
        customer_ttl: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._cache = cache
        self._customer_ttl = customer_ttl
        self._transport = transport
        self._customer_documents: dict[str, str] = {}

    @property
    def api_url(self) -> str:
        return f"{self._settings.base_url.rstrip('/')}/api/v3"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.api_url,
            timeout=self._settings.timeout,
            transport=self._transport,
            headers={
                "Content-Type": "application/json",
                "User-Agent": self._settings.user_agent,
                "access_token": self._settings.api_key,
            },
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        if not self._settings.api_key:
            raise UpstreamGatewayError(f"Asaas API key not configured ({path})")
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise UpstreamGatewayError(f"Asaas API network error on {path}: {exc}") from exc

        if response.is_error:
            raise UpstreamGatewayError(
                f"Asaas API {response.status_code} on {path}",
                http_status=response.status_code,
                body=response.text,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamGatewayError(f"Asaas API returned invalid JSON on {path}") from exc

    async def find_or_create_customer(
        self,
        *,
        name: str,
        cpf_cnpj: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> str:
        document = only_digits(cpf_cnpj)
        cache_key = f"{CUSTOMER_CACHE_PREFIX}{document}"
        if self._cache is not None:
            cached = self._cache.get(cache_key, ttl=self._customer_ttl)
            if cached:
                return cached

        search = await self._request("GET", "/customers", params={"cpfCnpj": document})
        found = search.get("data") or []
        if found:
            customer_id = found[0]["id"]
        else:
            created = await self._request(
                "POST",
                "/customers",
                json={"name": name, "cpfCnpj": document, "email": email, "phone": phone},
            )
            customer_id = created["id"]
            logger.info("Created Asaas customer %s", customer_id)

        if self._cache is not None:
            self._cache.set(cache_key, customer_id)
            self._customer_documents[customer_id] = document
        return customer_id

    async def create_pix_charge(
        self,
        *,
        customer_id: Optional[str],
        amount: Decimal,
        description: str,
        external_reference: str,
        due_date: date,
    ) -> str:
        try:
            payload = await self._request(
                "POST",
                "/payments",
                json={
                    "customer": customer_id,
                    "billingType": "PIX",
                    "value": float(amount),
                    "description": description,
                    "externalReference": external_reference,
                    "dueDate": due_date.isoformat(),
                },
            )
        except UpstreamGatewayError as exc:
            if customer_id and _rejects_customer(exc):
                self._forget_customer(customer_id)
            raise
        return payload["id"]

    def _forget_customer(self, customer_id: str) -> None:
        document = self._customer_documents.pop(customer_id, None)
        if document is not None and self._cache is not None:
            self._cache.invalidate(f"{CUSTOMER_CACHE_PREFIX}{document}")
            logger.info("Evicted cached Asaas customer %s", customer_id)

    async def get_pix_qr_code(self, charge_id: str) -> PixQrCode:
        payload = await self._request("GET", f"/payments/{charge_id}/pixQrCode")
        return PixQrCode(
            encoded_image=payload.get("encodedImage") or "",
            payload=payload.get("payload") or "",
            expiration_date=payload.get("expirationDate"),
        )

    async def create_transfer(
        self,
        *,
        amount: Decimal,
        pix_key: str,
        pix_key_type: str,
        description: str,
    ) -> TransferReceipt:
        payload = await self._request(
            "POST",
            "/transfers",
            json={
                "value": float(amount),
                "operationType": "PIX",
                "pixAddressKey": pix_key,
                "pixAddressKeyType": pix_key_type,
                "description": description,
            },
        )
        return TransferReceipt(
            id=payload["id"],
            status=payload.get("status", ""),
            value=Decimal(str(payload.get("value", amount))),
        )
