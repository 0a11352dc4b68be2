"""JWT authentication for admin endpoints."""
from fastapi import HTTPException, Request, status
from jose import jwt, JWTError
from pydantic import BaseModel
from typing import Optional

ADMIN_ROLE = "admin"
JWT_ALGORITHM = "HS256"


class AdminUser(BaseModel):
    """Admin identity extracted from JWT."""
    subject: str
    role: str
    email: Optional[str] = None


async def require_admin(request: Request) -> AdminUser:
    """
    Validate the Bearer token on an admin request.

    The token must be signed with ADMIN_JWT_SECRET and carry role=admin.

    Args:
        request: FastAPI request object to extract Authorization header

    Returns:
        AdminUser with subject, role and email from token

    Raises:
        HTTPException: 503 when no secret is configured, 401 for a missing or
            invalid token, 403 for a non-admin token
    """
    secret = request.app.state.settings.admin_jwt_secret
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Export disabled: ADMIN_JWT_SECRET is not configured",
        )

    auth_header = request.headers.get("authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = auth_header[7:]  # Remove "Bearer " prefix

    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    subject = payload.get("sub")
    if subject is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing subject",
            headers={"WWW-Authenticate": "Bearer"},
        )

    role = payload.get("role")
    if role != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )

    return AdminUser(subject=subject, role=role, email=payload.get("email"))
