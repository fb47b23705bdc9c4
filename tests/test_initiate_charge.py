from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import update

from vya_settlement.core.exceptions import ConflictError, NotFoundError, ValidationError
from vya_settlement.db.models import Package
from vya_settlement.modules.settlement import CHARGE_TTL


async def load_package(session_factory, package_id):
    async with session_factory() as session:
        return await session.get(Package, package_id)


@pytest.fixture
async def world(seed):
    await seed.profile("sender-1", cpf="123.456.789-09", email="sender@vya.app")
    await seed.profile("traveler-1")
    await seed.trip("trip-later", "traveler-1", days_ahead=5)
    await seed.trip("trip-soon", "traveler-1", days_ahead=1)
    await seed.trip("trip-done", "traveler-1", status="completed", days_ahead=-3)
    await seed.package("pkg-1", "sender-1", price="50.00")


async def test_charge_moves_package_to_waiting_payment(world, make_service, gateway, session_factory):
    fixed_now = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
    service = make_service()
    service.clock = lambda: fixed_now

    result = await service.initiate_charge("traveler-1", "pkg-1")

    assert result.payment_id == "pay_0001"
    assert not result.is_mock
    assert result.amount == Decimal("50.00")
    assert result.expires_at == fixed_now + CHARGE_TTL
    assert result.copy_paste_code.startswith("000201")
    assert gateway.charges[0]["customer_id"] == "cus_0001"
    assert gateway.charges[0]["external_reference"] == "pkg-1"
    assert gateway.customers == {"123.456.789-09": "cus_0001"}

    package = await load_package(session_factory, "pkg-1")
    assert package.status == "waiting_payment"
    assert package.asaas_payment_id == "pay_0001"
    assert package.trip_id == "trip-soon"
    assert package.pix_copy_paste == result.copy_paste_code


async def test_explicit_trip_is_kept(world, make_service, session_factory):
    await make_service().initiate_charge("traveler-1", "pkg-1", trip_id="trip-later")

    package = await load_package(session_factory, "pkg-1")
    assert package.trip_id == "trip-later"


async def test_gateway_failure_falls_back_to_mock_charge(world, make_service, gateway, session_factory, caplog):
    gateway.fail_charge = True

    result = await make_service().initiate_charge("traveler-1", "pkg-1")

    assert result.is_mock
    assert result.payment_id.startswith("MOCK_")
    assert result.payment_id[len("MOCK_"):].isdigit()
    assert result.qr_image == ""
    assert "pkg-1" in result.copy_paste_code
    assert f"waiting payment on placeholder charge {result.payment_id}" in caplog.text

    package = await load_package(session_factory, "pkg-1")
    assert package.status == "waiting_payment"
    assert package.asaas_payment_id == result.payment_id


async def test_customer_lookup_failure_is_not_fatal(world, make_service, gateway):
    gateway.fail_customer = True

    result = await make_service().initiate_charge("traveler-1", "pkg-1")

    assert not result.is_mock
    assert gateway.charges[0]["customer_id"] is None


async def test_package_not_searching_is_a_conflict(seed, make_service, gateway):
    await seed.profile("sender-1")
    await seed.package("pkg-1", "sender-1", status="waiting_payment", payment_id="pay_old")

    with pytest.raises(ConflictError) as exc_info:
        await make_service().initiate_charge("traveler-1", "pkg-1")

    assert exc_info.value.status_code == 409
    assert exc_info.value.to_payload()["status"] == "waiting_payment"
    assert gateway.charges == []


async def test_unknown_package_is_not_found(make_service):
    with pytest.raises(NotFoundError):
        await make_service().initiate_charge("traveler-1", "missing")


async def test_package_id_is_required(make_service):
    with pytest.raises(ValidationError) as exc_info:
        await make_service().initiate_charge("traveler-1", None)
    assert exc_info.value.status_code == 400


async def test_concurrent_claim_loses_with_conflict(world, make_service, gateway, session_factory):
    async def claim_elsewhere():
        async with session_factory() as other:
            await other.execute(
                update(Package).where(Package.id == "pkg-1").values(status="waiting_payment", asaas_payment_id="pay_x")
            )
            await other.commit()

    gateway.before_charge = claim_elsewhere

    with pytest.raises(ConflictError) as exc_info:
        await make_service().initiate_charge("traveler-2", "pkg-1")

    assert exc_info.value.to_payload()["status"] == "waiting_payment"
    package = await load_package(session_factory, "pkg-1")
    assert package.asaas_payment_id == "pay_x"
