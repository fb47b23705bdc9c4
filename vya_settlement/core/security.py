"""Bearer token verification for requests signed by the auth provider."""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from vya_settlement.core.config import Settings, get_settings
from vya_settlement.core.exceptions import AuthenticationError
from vya_settlement.schemas import TokenData

security = HTTPBearer(auto_error=False)


def decode_access_token(token: str, settings: Settings) -> TokenData:
    audience = settings.security.audience
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.algorithm],
            audience=audience,
            options={"verify_aud": audience is not None},
        )
    except JWTError as exc:
        raise AuthenticationError("Não autenticado.") from exc

    actor_id = payload.get("sub")
    if not actor_id:
        raise AuthenticationError("Não autenticado.")
    return TokenData(actor_id=actor_id, email=payload.get("email"), role=payload.get("role"))


async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> TokenData:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Não autenticado.")
    return decode_access_token(credentials.credentials, settings)
