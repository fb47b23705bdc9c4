import uvicorn

from vya_settlement.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "vya_settlement.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )


if __name__ == "__main__":
    main()
