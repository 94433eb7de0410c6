from jose import jwt

from app.core.config import get_settings


def decode_access_token(token: str) -> dict:
    """Decode a Supabase Auth access token.

    Raises ``jose.JWTError`` when the signature, expiry or audience is wrong.
    """
    settings = get_settings()
    return jwt.decode(
        token,
        settings.supabase_jwt_secret,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
    )
