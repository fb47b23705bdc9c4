"""
Define a taxa da plataforma (configs.platformFeePercent)
Uso: python init_platform_fee.py 15
"""
import asyncio
import sys
from decimal import Decimal, InvalidOperation

from vya_settlement.db.models import PlatformConfig
from vya_settlement.infrastructure.database import get_session, init_db
from vya_settlement.modules.settlement.fees import DEFAULT_PLATFORM_FEE_PERCENT, PLATFORM_FEE_KEY


async def set_platform_fee(percent: Decimal):
    """Cria ou atualiza a linha de configuração da taxa"""
    await init_db()

    async for db in get_session():
        row = await db.get(PlatformConfig, PLATFORM_FEE_KEY)
        if row is None:
            db.add(PlatformConfig(key=PLATFORM_FEE_KEY, value=str(percent)))
        else:
            row.value = str(percent)
        await db.commit()

        print(f"Taxa da plataforma definida: {percent}%")


def parse_args(argv: list[str]) -> Decimal:
    if len(argv) < 2:
        return DEFAULT_PLATFORM_FEE_PERCENT
    try:
        percent = Decimal(argv[1])
    except InvalidOperation:
        raise SystemExit(f"Percentual inválido: {argv[1]}")
    if not Decimal(0) <= percent <= Decimal(100):
        raise SystemExit("O percentual deve estar entre 0 e 100")
    return percent


if __name__ == "__main__":
    asyncio.run(set_platform_fee(parse_args(sys.argv)))
