"""Settlement orchestrator: PIX charge initiation, gateway confirmation and withdrawals.

Each operation is a stateless request handler over the ledger store. Commit
points are explicit so that no database transaction stays open across a call
to the payment gateway; consistency across concurrent invocations relies on
conditional updates (package status guards, wallet balance compare-and-swap).
"""

from __future__ import annotations

import hmac
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vya_settlement.core.exceptions import (
    AuthenticationError,
    ConflictError,
    InsufficientBalanceError,
    InternalError,
    NotFoundError,
    UpstreamGatewayError,
    ValidationError,
)
from vya_settlement.infrastructure.database.repositories.lookup_repository import SqlLookupRepository
from vya_settlement.infrastructure.gateway import PaymentGateway
from vya_settlement.modules.notifications import NotificationService
from vya_settlement.modules.packages import PackageRecord, PackageService
from vya_settlement.modules.packages.models import SEARCHING, WAITING_PAYMENT
from vya_settlement.modules.wallets import WalletService

from .fees import PLATFORM_FEE_KEY, parse_fee_percent, traveler_amount
from .models import PROCESSABLE_EVENTS, ChargeResult, PaymentStatus, WebhookAck, WithdrawalResult
from .pix import MOCK_PAYMENT_PREFIX, fallback_copy_paste, resolve_pix_key
from .repository import LookupRepository

logger = logging.getLogger(__name__)

CHARGE_TTL = timedelta(hours=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


@dataclass(slots=True)
class SettlementService:
    session: AsyncSession
    packages: PackageService
    wallets: WalletService
    notifications: NotificationService
    lookups: LookupRepository
    gateway: PaymentGateway
    webhook_token: Optional[str] = None
    clock: Callable[[], datetime] = field(default=utcnow)

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        gateway: PaymentGateway,
        *,
        webhook_token: Optional[str] = None,
    ) -> "SettlementService":
        return cls(
            session=session,
            packages=PackageService.with_session(session),
            wallets=WalletService.with_session(session),
            notifications=NotificationService.with_session(session),
            lookups=SqlLookupRepository(session),
            gateway=gateway,
            webhook_token=webhook_token,
        )

    # ------------------------------------------------------------------
    # Initiate charge
    # ------------------------------------------------------------------
    async def initiate_charge(
        self,
        actor_id: str,
        package_id: Optional[str],
        trip_id: Optional[str] = None,
    ) -> ChargeResult:
        if not actor_id:
            raise AuthenticationError("Não autenticado.")
        if not package_id:
            raise ValidationError("packageId é obrigatório.", required=["packageId"])

        package = await self.packages.get(package_id)
        if package is None:
            raise NotFoundError("Pacote não encontrado.", packageId=package_id)
        if package.status != SEARCHING:
            raise ConflictError(
                f"Pacote não está disponível. Status atual: {package.status}",
                status=package.status,
            )

        if not trip_id:
            trip_id = await self.lookups.next_trip_id(actor_id)

        customer_id = await self._resolve_customer(package.sender_id)

        now = self.clock()
        expires_at = now + CHARGE_TTL
        payment_id, qr_image, copy_paste = await self._create_charge(package, customer_id, expires_at)

        try:
            claimed = await self.packages.mark_waiting_payment(
                package.id,
                payment_id=payment_id,
                qr_code=qr_image,
                copy_paste=copy_paste,
                expires_at=expires_at,
                trip_id=trip_id,
            )
            if not claimed:
                await self.session.rollback()
                current = await self.packages.current_status(package.id)
                raise ConflictError(
                    f"Pacote não está disponível. Status atual: {current}",
                    status=current,
                )
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Failed to persist charge %s for package %s: %s", payment_id, package.id, exc)
            raise InternalError("Erro ao atualizar pacote no banco.") from exc

        result = ChargeResult(
            package_id=package.id,
            payment_id=payment_id,
            qr_image=qr_image,
            copy_paste_code=copy_paste,
            expires_at=expires_at,
            amount=package.price,
        )
        if result.is_mock:
            logger.warning("Package %s waiting payment on placeholder charge %s", package.id, payment_id)
        else:
            logger.info(
                "Package %s waiting payment (charge %s, trip %s, traveler %s)",
                package.id,
                payment_id,
                trip_id,
                actor_id,
            )
        return result

    async def _resolve_customer(self, sender_id: str) -> Optional[str]:
        profile = await self.lookups.get_profile(sender_id)
        if profile is None or not profile.cpf:
            return None
        try:
            return await self.gateway.find_or_create_customer(
                name=profile.full_name or "",
                cpf_cnpj=profile.cpf,
                email=profile.email,
                phone=profile.phone,
            )
        except Exception as exc:
            # anonymous charges are accepted by the sandbox
            logger.error("Customer lookup failed for sender %s: %s", sender_id, exc)
            return None

    async def _create_charge(
        self,
        package: PackageRecord,
        customer_id: Optional[str],
        expires_at: datetime,
    ) -> tuple[str, str, str]:
        try:
            payment_id = await self.gateway.create_pix_charge(
                customer_id=customer_id,
                amount=package.price,
                description=f"VYA Frete: {package.description} ({package.size})",
                external_reference=package.id,
                due_date=expires_at.date(),
            )
            qr = await self.gateway.get_pix_qr_code(payment_id)
            return payment_id, qr.encoded_image, qr.payload
        except Exception as exc:
            logger.error("PIX charge failed for package %s, using placeholder: %s", package.id, exc)
            payment_id = f"{MOCK_PAYMENT_PREFIX}{int(time.time() * 1000)}"
            return payment_id, "", fallback_copy_paste(package.id)

    # ------------------------------------------------------------------
    # Gateway confirmation
    # ------------------------------------------------------------------
    def verify_signature(self, signature_token: Optional[str]) -> None:
        if not self.webhook_token:
            return
        if not signature_token or not hmac.compare_digest(
            signature_token.encode("utf-8"), self.webhook_token.encode("utf-8")
        ):
            logger.warning("Rejected gateway event with invalid token")
            raise AuthenticationError("Unauthorized")

    async def handle_gateway_event(
        self,
        signature_token: Optional[str],
        event: Optional[Mapping[str, Any]],
    ) -> WebhookAck:
        """Apply a PAYMENT_RECEIVED/CONFIRMED event; every other outcome is a 200-shaped ack."""
        self.verify_signature(signature_token)
        if not isinstance(event, Mapping):
            raise ValidationError("Body inválido.")

        kind = event.get("event")
        logger.info("Gateway event received: %s", kind)
        if not isinstance(kind, str) or kind not in PROCESSABLE_EVENTS:
            return WebhookAck(skipped=True)

        payment = event.get("payment")
        payment_id = payment.get("id") if isinstance(payment, Mapping) else None
        if not payment_id or not isinstance(payment_id, str):
            raise ValidationError("payment.id ausente.")

        package = await self.packages.get_by_payment_id(payment_id)
        if package is None:
            logger.warning("No package found for payment %s", payment_id)
            return WebhookAck(found=False)

        if package.status != WAITING_PAYMENT:
            logger.info("Package %s already in status %s, ignoring", package.id, package.status)
            return WebhookAck(already_processed=True)

        try:
            moved = await self.packages.mark_waiting_pickup(package.id)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Failed to update package %s status: %s", package.id, exc)
            raise InternalError("Erro ao atualizar pacote.") from exc
        if not moved:
            logger.info("Package %s was settled by a concurrent delivery", package.id)
            return WebhookAck(already_processed=True)

        credited = await self._credit_traveler(package)
        await self._notify_sender(package)

        logger.info("Package %s settled", package.id)
        return WebhookAck(package_id=package.id, credited_amount=credited)

    async def _credit_traveler(self, package: PackageRecord) -> Optional[Decimal]:
        if not package.trip_id:
            return None
        try:
            traveler_id = await self.lookups.get_trip_traveler_id(package.trip_id)
            if not traveler_id:
                logger.warning("Trip %s has no traveler, package %s not credited", package.trip_id, package.id)
                return None
            fee_percent = parse_fee_percent(await self.lookups.get_config_value(PLATFORM_FEE_KEY))
            amount = traveler_amount(package.price, fee_percent)
            await self.wallets.credit(
                user_id=traveler_id,
                amount=amount,
                package_id=package.id,
                description=f"Frete do pacote {package.id[:8]}",
            )
            await self.session.commit()
        except SQLAlchemyError as exc:
            # package status stays authoritative; credit is reconciled manually
            await self.session.rollback()
            logger.error("Failed to credit wallet for package %s: %s", package.id, exc)
            return None
        logger.info("Traveler %s credited with R$ %s", traveler_id, amount)
        return amount

    async def _notify_sender(self, package: PackageRecord) -> None:
        try:
            await self.notifications.payment_confirmed(package.sender_id)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Failed to notify sender %s: %s", package.sender_id, exc)

    # ------------------------------------------------------------------
    # Withdraw
    # ------------------------------------------------------------------
    async def withdraw(
        self,
        actor_id: str,
        pix_key: Optional[str] = None,
        pix_key_type: Optional[str] = None,
    ) -> WithdrawalResult:
        if not actor_id:
            raise AuthenticationError("Não autenticado.")

        wallet = await self.wallets.get_snapshot(actor_id)
        if wallet is None:
            raise NotFoundError("Carteira não encontrada.")
        available = wallet.available_balance
        if available <= 0:
            raise InsufficientBalanceError(
                "Saldo disponível insuficiente para saque.",
                available=float(available),
            )

        profile = None
        if not (pix_key and pix_key_type):
            profile = await self.lookups.get_profile(actor_id)
        key, key_type = resolve_pix_key(pix_key, pix_key_type, profile)

        try:
            debited = await self.wallets.debit_all(wallet.id, available)
            if not debited:
                await self.session.rollback()
                raise ConflictError("Conflito ao processar saque. Tente novamente.")
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Failed to debit wallet %s: %s", wallet.id, exc)
            raise InternalError("Erro ao debitar saldo.") from exc

        try:
            tx = await self.wallets.open_withdrawal(wallet.id, available, f"Saque PIX para {key}")
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Failed to record withdrawal for wallet %s: %s", wallet.id, exc)
            await self._compensate(wallet.id, available, None)
            raise InternalError("Erro ao registrar transação.", balance_restored=True) from exc

        try:
            await self.gateway.create_transfer(
                amount=available,
                pix_key=key,
                pix_key_type=key_type,
                description=f"Repasse VYA - Saque #{tx.id[:8]}",
            )
        except Exception as exc:
            logger.error("PIX transfer failed for withdrawal %s: %s", tx.id, exc)
            await self._compensate(wallet.id, available, tx.id)
            raise UpstreamGatewayError(
                "Falha ao processar transferência PIX. Saldo restaurado.",
                balance_restored=True,
                details=str(exc),
            ) from exc

        try:
            await self.wallets.complete_transaction(tx.id)
            await self.session.commit()
        except SQLAlchemyError as exc:
            # funds already left; the row stays PENDING for manual review
            await self.session.rollback()
            logger.error("Transfer sent but withdrawal %s not marked completed: %s", tx.id, exc)

        logger.info("Wallet %s withdrew R$ %s to %s key", wallet.id, available, key_type)
        return WithdrawalResult(
            amount_withdrawn=available,
            transaction_id=tx.id,
            pix_key=key,
            pix_key_type=key_type,
        )

    async def _compensate(self, wallet_id: str, amount: Decimal, transaction_id: Optional[str]) -> None:
        try:
            await self.wallets.restore(wallet_id, amount)
            if transaction_id is not None:
                await self.wallets.fail_transaction(transaction_id)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.critical(
                "Could not restore R$ %s to wallet %s (transaction %s): %s",
                amount,
                wallet_id,
                transaction_id,
                exc,
            )
            raise InternalError("Erro ao restaurar saldo.") from exc
        logger.info("Restored R$ %s to wallet %s", amount, wallet_id)

    # ------------------------------------------------------------------
    # Checkout polling
    # ------------------------------------------------------------------
    async def payment_status(self, actor_id: str, package_id: str) -> PaymentStatus:
        package = await self.packages.get(package_id)
        if package is None:
            raise NotFoundError("Pacote não encontrado.", packageId=package_id)
        if actor_id != package.sender_id:
            traveler_id = await self.lookups.get_trip_traveler_id(package.trip_id) if package.trip_id else None
            if actor_id != traveler_id:
                raise NotFoundError("Pacote não encontrado.", packageId=package_id)

        expires_at = _as_utc(package.expires_at) if package.expires_at else None
        expired = bool(
            package.status == WAITING_PAYMENT and expires_at is not None and expires_at <= self.clock()
        )
        return PaymentStatus(
            package_id=package.id,
            status=package.status,
            amount=package.price,
            pix_qr_code=package.pix_qr_code,
            pix_copy_paste=package.pix_copy_paste,
            expires_at=expires_at,
            expired=expired,
        )
