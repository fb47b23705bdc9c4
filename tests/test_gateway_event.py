from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from vya_settlement.core.exceptions import AuthenticationError, ValidationError
from vya_settlement.db.models import Notification, Package, Wallet, WalletTransaction
from vya_settlement.modules.wallets import WalletService


def confirmed(payment_id, event="PAYMENT_CONFIRMED"):
    return {"event": event, "payment": {"id": payment_id, "value": 50.0}}


async def fetch_all(session_factory, model):
    async with session_factory() as session:
        return (await session.execute(select(model))).scalars().all()


async def fetch_wallet(session_factory, user_id):
    async with session_factory() as session:
        result = await session.execute(select(Wallet).where(Wallet.user_id == user_id))
        return result.scalars().first()


@pytest.fixture
async def waiting(seed):
    await seed.profile("sender-1")
    await seed.profile("traveler-1")
    await seed.trip("trip-1", "traveler-1")
    await seed.package("pkg-1", "sender-1", price="50.00", status="waiting_payment", trip_id="trip-1", payment_id="pay_1")


async def test_confirmation_settles_and_credits_traveler(waiting, make_service, session_factory):
    ack = await make_service().handle_gateway_event(None, confirmed("pay_1"))

    assert ack.to_payload() == {"received": True, "packageId": "pkg-1", "creditedAmount": 40.0}

    async with session_factory() as session:
        package = await session.get(Package, "pkg-1")
    assert package.status == "waiting_pickup"

    wallet = await fetch_wallet(session_factory, "traveler-1")
    assert wallet.available_balance_cents == 4000
    assert wallet.total_earned_cents == 4000

    [tx] = await fetch_all(session_factory, WalletTransaction)
    assert (tx.type, tx.status, tx.package_id) == ("CREDIT", "COMPLETED", "pkg-1")
    assert tx.amount_cents == 4000

    [notification] = await fetch_all(session_factory, Notification)
    assert notification.user_id == "sender-1"
    assert notification.title == "Pagamento Confirmado! 🎉"
    assert notification.type == "shipment"


async def test_duplicate_delivery_credits_once(waiting, make_service, session_factory):
    service = make_service()
    await service.handle_gateway_event(None, confirmed("pay_1", "PAYMENT_RECEIVED"))
    second = await service.handle_gateway_event(None, confirmed("pay_1", "PAYMENT_CONFIRMED"))

    assert second.to_payload() == {"received": True, "already_processed": True}
    wallet = await fetch_wallet(session_factory, "traveler-1")
    assert wallet.available_balance_cents == 4000
    assert len(await fetch_all(session_factory, WalletTransaction)) == 1
    assert len(await fetch_all(session_factory, Notification)) == 1


async def test_existing_wallet_is_incremented_with_configured_fee(waiting, seed, make_service, session_factory):
    await seed.wallet("traveler-1", available="10.00", total_earned="10.00")
    await seed.fee("10")

    ack = await make_service().handle_gateway_event(None, confirmed("pay_1"))

    assert ack.credited_amount == Decimal("45.00")
    wallet = await fetch_wallet(session_factory, "traveler-1")
    assert wallet.available_balance_cents == 5500
    assert wallet.total_earned_cents == 5500


async def test_invalid_fee_config_uses_default(waiting, seed, make_service):
    await seed.fee("vinte")

    ack = await make_service().handle_gateway_event(None, confirmed("pay_1"))

    assert ack.credited_amount == Decimal("40.00")


async def test_package_without_trip_is_settled_without_credit(seed, make_service, session_factory):
    await seed.profile("sender-1")
    await seed.package("pkg-2", "sender-1", status="waiting_payment", payment_id="pay_2")

    ack = await make_service().handle_gateway_event(None, confirmed("pay_2"))

    assert ack.to_payload() == {"received": True, "packageId": "pkg-2"}
    assert await fetch_all(session_factory, Wallet) == []
    assert len(await fetch_all(session_factory, Notification)) == 1


async def test_credit_failure_keeps_status_and_notifies(waiting, make_service, session_factory, monkeypatch):
    service = make_service()

    async def broken_credit(self, **kwargs):
        raise OperationalError("UPDATE wallets", {}, Exception("disk I/O error"))

    monkeypatch.setattr(WalletService, "credit", broken_credit)

    ack = await service.handle_gateway_event(None, confirmed("pay_1"))

    assert ack.package_id == "pkg-1"
    assert ack.credited_amount is None
    async with session_factory() as session:
        package = await session.get(Package, "pkg-1")
    assert package.status == "waiting_pickup"
    assert len(await fetch_all(session_factory, Notification)) == 1


async def test_unknown_payment_is_acknowledged(make_service):
    ack = await make_service().handle_gateway_event(None, confirmed("pay_unknown"))
    assert ack.to_payload() == {"received": True, "found": False}


@pytest.mark.parametrize(
    "event",
    ["PAYMENT_CREATED", "PAYMENT_OVERDUE", None, 42, ["PAYMENT_RECEIVED"], {"type": "PAYMENT_CONFIRMED"}],
)
async def test_other_events_are_skipped(event, waiting, make_service, session_factory):
    ack = await make_service().handle_gateway_event(None, confirmed("pay_1", event))

    assert ack.to_payload() == {"received": True, "skipped": True}
    async with session_factory() as session:
        package = await session.get(Package, "pkg-1")
    assert package.status == "waiting_payment"


async def test_missing_payment_id_is_rejected(make_service):
    with pytest.raises(ValidationError) as exc_info:
        await make_service().handle_gateway_event(None, {"event": "PAYMENT_CONFIRMED", "payment": {}})
    assert exc_info.value.status_code == 400


async def test_non_object_body_is_rejected(make_service):
    with pytest.raises(ValidationError):
        await make_service().handle_gateway_event(None, None)
    with pytest.raises(ValidationError):
        await make_service().handle_gateway_event(None, ["PAYMENT_CONFIRMED"])


async def test_token_is_checked_when_configured(waiting, make_service, session_factory):
    service = make_service(webhook_token="s3cret")

    with pytest.raises(AuthenticationError):
        await service.handle_gateway_event("wrong", confirmed("pay_1"))
    with pytest.raises(AuthenticationError):
        await service.handle_gateway_event(None, confirmed("pay_1"))
    with pytest.raises(AuthenticationError):
        await service.handle_gateway_event("s3crét", None)

    async with session_factory() as session:
        package = await session.get(Package, "pkg-1")
    assert package.status == "waiting_payment"

    ack = await service.handle_gateway_event("s3cret", confirmed("pay_1"))
    assert ack.package_id == "pkg-1"
