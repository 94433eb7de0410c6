from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from supabase import Client

from app.core.exceptions import PersistenceError
from app.core.security import decode_access_token
from app.crud.profile import get_profile
from app.db.base import get_supabase
from app.schemas.auth import AdminCaller

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/v1/token")


async def get_current_admin(
    token: str = Depends(oauth2_scheme),
    client: Client = Depends(get_supabase),
) -> AdminCaller:
    """Resolve the bearer token to an operator, or reject the request."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_access_token(token)
        user_id: str | None = payload.get("sub")
        if user_id is None:
            raise credentials_exception
    except (JWTError, ValueError):
        raise credentials_exception

    try:
        profile = await get_profile(client, user_id)
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Something went wrong. Please try again.",
        )

    if not profile or not profile.get("is_admin"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    return AdminCaller(user_id=user_id, email=payload.get("email"), is_admin=True)
