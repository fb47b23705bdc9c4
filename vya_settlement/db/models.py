"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from vya_settlement.infrastructure.database.base import Base

MONEY = Numeric(12, 2)


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    full_name = Column(String(150))
    cpf = Column(String(20))
    email = Column(String(150))
    phone = Column(String(30))
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Trip(Base):
    __tablename__ = "trips"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    traveler_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    origin = Column(String(120))
    destination = Column(String(120))
    departure_date = Column(DateTime(timezone=True))
    status = Column(String(20), nullable=False, default="scheduled")  # scheduled, active, completed, canceled
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    traveler = relationship("Profile")


class Package(Base):
    __tablename__ = "packages"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    sender_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    trip_id = Column(String(36), ForeignKey("trips.id"), nullable=True, index=True)
    description = Column(String(255))
    size = Column(String(20))
    price = Column(MONEY, nullable=False)
    status = Column(String(30), nullable=False, default="searching")
    asaas_payment_id = Column(String(100), index=True)
    pix_qr_code = Column(Text)
    pix_copy_paste = Column(Text)
    expires_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    sender = relationship("Profile")
    trip = relationship("Trip")


class Wallet(Base):
    __tablename__ = "wallets"
    __table_args__ = (CheckConstraint("available_balance_cents >= 0", name="ck_wallets_available_non_negative"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, unique=True, index=True)
    available_balance_cents = Column(Integer, nullable=False, default=0)
    pending_balance_cents = Column(Integer, nullable=False, default=0)
    total_earned_cents = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    transactions = relationship("WalletTransaction", back_populates="wallet", cascade="all, delete-orphan")


class WalletTransaction(Base):
    __tablename__ = "wallet_transactions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    wallet_id = Column(String(36), ForeignKey("wallets.id"), nullable=False, index=True)
    package_id = Column(String(36), ForeignKey("packages.id"), nullable=True, index=True)
    type = Column(String(20), nullable=False)  # CREDIT, WITHDRAWAL
    amount_cents = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="PENDING")  # PENDING, COMPLETED, FAILED
    description = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    wallet = relationship("Wallet", back_populates="transactions")


class PlatformConfig(Base):
    __tablename__ = "configs"

    key = Column(String(100), primary_key=True)
    value = Column(String(255))
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    title = Column(String(150), nullable=False)
    message = Column(Text)
    type = Column(String(30))
    read_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
