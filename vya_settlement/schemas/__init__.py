"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TokenData(BaseModel):
    actor_id: str
    email: Optional[str] = None
    role: Optional[str] = None


class GeneratePixRequest(CamelModel):
    package_id: Optional[str] = Field(default=None, alias="packageId")
    trip_id: Optional[str] = Field(default=None, alias="tripId")


class GeneratePixResponse(CamelModel):
    success: bool = True
    package_id: str = Field(alias="packageId")
    pix_qr_code: str = Field(alias="pixQrCode")
    pix_copy_paste: str = Field(alias="pixCopyPaste")
    expires_at: datetime = Field(alias="expiresAt")
    amount: float


class PaymentStatusResponse(CamelModel):
    package_id: str = Field(alias="packageId")
    status: str
    amount: float
    pix_qr_code: Optional[str] = Field(default=None, alias="pixQrCode")
    pix_copy_paste: Optional[str] = Field(default=None, alias="pixCopyPaste")
    expires_at: Optional[datetime] = Field(default=None, alias="expiresAt")
    expired: bool = False


class WithdrawRequest(CamelModel):
    pix_key: Optional[str] = Field(default=None, alias="pixKey")
    pix_key_type: Optional[str] = Field(default=None, alias="pixKeyType")


class WithdrawResponse(CamelModel):
    success: bool = True
    amount: float
    transaction_id: str = Field(alias="transactionId")
    message: str


class WalletSnapshotResponse(CamelModel):
    available_balance: float = Field(alias="availableBalance")
    pending_balance: float = Field(alias="pendingBalance")
    total_earned: float = Field(alias="totalEarned")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class WalletTransactionResponse(CamelModel):
    id: str
    type: str
    amount: float
    status: str
    description: Optional[str] = None
    package_id: Optional[str] = Field(default=None, alias="packageId")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")


class WalletTransactionListResponse(BaseModel):
    transactions: list[WalletTransactionResponse] = Field(default_factory=list)
