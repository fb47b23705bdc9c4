"""
Shared fixtures: per-test SQLite ledger, in-memory payment gateway, seed helpers.
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from vya_settlement.core.exceptions import UpstreamGatewayError
from vya_settlement.db.models import Package, PlatformConfig, Profile, Trip, Wallet
from vya_settlement.infrastructure.database.base import Base
from vya_settlement.infrastructure.gateway import PixQrCode, TransferReceipt
from vya_settlement.modules.settlement import SettlementService
from vya_settlement.modules.wallets.models import to_cents


class FakeGateway:
    """In-memory stand-in for the Asaas adapter."""

    def __init__(self):
        self.customers = {}
        self.charges = []
        self.transfers = []
        self.fail_customer = False
        self.fail_charge = False
        self.fail_transfer = False
        self.before_charge = None

    async def find_or_create_customer(self, *, name, cpf_cnpj, email=None, phone=None):
        if self.fail_customer:
            raise UpstreamGatewayError("customer lookup down", http_status=503)
        return self.customers.setdefault(cpf_cnpj, f"cus_{len(self.customers) + 1:04d}")

    async def create_pix_charge(self, *, customer_id, amount, description, external_reference, due_date):
        if self.before_charge is not None:
            await self.before_charge()
        if self.fail_charge:
            raise UpstreamGatewayError("Asaas API 500 on /payments", http_status=500, body="boom")
        charge_id = f"pay_{len(self.charges) + 1:04d}"
        self.charges.append(
            {
                "id": charge_id,
                "customer_id": customer_id,
                "amount": amount,
                "description": description,
                "external_reference": external_reference,
                "due_date": due_date,
            }
        )
        return charge_id

    async def get_pix_qr_code(self, charge_id):
        return PixQrCode(encoded_image="iVBORw0KGgo=", payload=f"00020126BR.GOV.BCB.PIX{charge_id}")

    async def create_transfer(self, *, amount, pix_key, pix_key_type, description):
        if self.fail_transfer:
            raise UpstreamGatewayError("Asaas API 400 on /transfers", http_status=400, body="saldo insuficiente")
        self.transfers.append(
            {"amount": amount, "pix_key": pix_key, "pix_key_type": pix_key_type, "description": description}
        )
        return TransferReceipt(id=f"tra_{len(self.transfers):04d}", status="PENDING", value=amount)


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def make_service(session, gateway):
    def _make(webhook_token: Optional[str] = None) -> SettlementService:
        return SettlementService.with_session(session, gateway, webhook_token=webhook_token)

    return _make


class Seeder:
    def __init__(self, session_factory):
        self._factory = session_factory

    async def add(self, *objects):
        async with self._factory() as session:
            session.add_all(objects)
            await session.commit()
        return objects[0] if len(objects) == 1 else objects

    async def profile(self, id, **kwargs):
        kwargs.setdefault("full_name", f"User {id}")
        return await self.add(Profile(id=id, **kwargs))

    async def trip(self, id, traveler_id, *, status="scheduled", days_ahead=1):
        departure = datetime.now(timezone.utc) + timedelta(days=days_ahead)
        return await self.add(Trip(id=id, traveler_id=traveler_id, status=status, departure_date=departure))

    async def package(self, id, sender_id, *, price="50.00", status="searching", trip_id=None, payment_id=None):
        return await self.add(
            Package(
                id=id,
                sender_id=sender_id,
                trip_id=trip_id,
                description="Caixa de livros",
                size="M",
                price=Decimal(price),
                status=status,
                asaas_payment_id=payment_id,
            )
        )

    async def wallet(self, user_id, available="0.00", total_earned="0.00"):
        return await self.add(
            Wallet(
                user_id=user_id,
                available_balance_cents=to_cents(Decimal(available)),
                pending_balance_cents=0,
                total_earned_cents=to_cents(Decimal(total_earned)),
            )
        )

    async def fee(self, percent):
        return await self.add(PlatformConfig(key="platformFeePercent", value=str(percent)))


@pytest.fixture
def seed(session_factory):
    return Seeder(session_factory)
