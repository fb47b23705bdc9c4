"""create settlement ledger tables

Revision ID: 5f1c0e9a7b21
Revises: 
Create Date: 2026-10-18 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5f1c0e9a7b21"
down_revision = None
branch_labels = None
depends_on = None

MONEY = sa.Numeric(12, 2)


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("full_name", sa.String(length=150)),
        sa.Column("cpf", sa.String(length=20)),
        sa.Column("email", sa.String(length=150)),
        sa.Column("phone", sa.String(length=30)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "trips",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("traveler_id", sa.String(length=36), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("origin", sa.String(length=120)),
        sa.Column("destination", sa.String(length=120)),
        sa.Column("departure_date", sa.DateTime(timezone=True)),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="scheduled"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_trips_traveler_id", "trips", ["traveler_id"])

    op.create_table(
        "packages",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("sender_id", sa.String(length=36), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("trip_id", sa.String(length=36), sa.ForeignKey("trips.id")),
        sa.Column("description", sa.String(length=255)),
        sa.Column("size", sa.String(length=20)),
        sa.Column("price", MONEY, nullable=False),
        sa.Column("status", sa.String(length=30), nullable=False, server_default="searching"),
        sa.Column("asaas_payment_id", sa.String(length=100)),
        sa.Column("pix_qr_code", sa.Text()),
        sa.Column("pix_copy_paste", sa.Text()),
        sa.Column("expires_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_packages_sender_id", "packages", ["sender_id"])
    op.create_index("ix_packages_trip_id", "packages", ["trip_id"])
    op.create_index("ix_packages_asaas_payment_id", "packages", ["asaas_payment_id"])

    op.create_table(
        "wallets",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("available_balance_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("pending_balance_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_earned_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.CheckConstraint("available_balance_cents >= 0", name="ck_wallets_available_non_negative"),
    )
    op.create_index("ix_wallets_user_id", "wallets", ["user_id"], unique=True)

    op.create_table(
        "wallet_transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("wallet_id", sa.String(length=36), sa.ForeignKey("wallets.id"), nullable=False),
        sa.Column("package_id", sa.String(length=36), sa.ForeignKey("packages.id")),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="PENDING"),
        sa.Column("description", sa.String(length=255)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_wallet_transactions_wallet_id", "wallet_transactions", ["wallet_id"])
    op.create_index("ix_wallet_transactions_package_id", "wallet_transactions", ["package_id"])

    op.create_table(
        "configs",
        sa.Column("key", sa.String(length=100), primary_key=True),
        sa.Column("value", sa.String(length=255)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("title", sa.String(length=150), nullable=False),
        sa.Column("message", sa.Text()),
        sa.Column("type", sa.String(length=30)),
        sa.Column("read_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_notifications_user_id", table_name="notifications")
    op.drop_table("notifications")

    op.drop_table("configs")

    op.drop_index("ix_wallet_transactions_package_id", table_name="wallet_transactions")
    op.drop_index("ix_wallet_transactions_wallet_id", table_name="wallet_transactions")
    op.drop_table("wallet_transactions")

    op.drop_index("ix_wallets_user_id", table_name="wallets")
    op.drop_table("wallets")

    op.drop_index("ix_packages_asaas_payment_id", table_name="packages")
    op.drop_index("ix_packages_trip_id", table_name="packages")
    op.drop_index("ix_packages_sender_id", table_name="packages")
    op.drop_table("packages")

    op.drop_index("ix_trips_traveler_id", table_name="trips")
    op.drop_table("trips")

    op.drop_table("profiles")
