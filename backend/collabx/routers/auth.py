import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from collabx.core.security import Identity, decode_access_token, identity_from_claims

router = APIRouter(prefix="/api/auth", tags=["auth"])
bearer_scheme = HTTPBearer(auto_error=False)


def _identity_from_credentials(credentials: HTTPAuthorizationCredentials | None) -> Identity | None:
    if credentials is None or not credentials.credentials:
        return None
    try:
        return identity_from_claims(decode_access_token(credentials.credentials))
    except (jwt.PyJWTError, ValueError):
        return None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    identity = _identity_from_credentials(credentials)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


async def require_admin(current_user: Identity = Depends(get_current_user)) -> Identity:
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user


@router.get("/me")
async def read_identity(current_user: Identity = Depends(get_current_user)):
    return {
        "uid": current_user.uid,
        "email": current_user.email,
        "display_name": current_user.name,
        "is_admin": current_user.is_admin,
    }
