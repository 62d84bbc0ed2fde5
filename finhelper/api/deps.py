"""
FastAPI dependencies (DB session, authentication)
"""
from fastapi import HTTPException, Request, status

from finhelper.auth import InvalidToken, access_token_ttl, get_token_maker
from finhelper.infrastructure.db.session import get_db as _get_db


# Re-export get_db for routers
get_db = _get_db

AUTHORIZATION_TYPE_BEARER = "bearer"


def get_current_principal(request: Request) -> str:
    """
    Resolve the authenticated username from `Authorization: Bearer <token>`

    Raises:
        HTTPException(401): header missing, wrong scheme, bad or expired token

    Usage:
        @router.get("/wallets")
        def list_wallets(principal: str = Depends(get_current_principal)):
            ...
    """
    header = request.headers.get("authorization")
    if not header:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="authorization header is not provided"
        )

    fields = header.split()
    if len(fields) != 2:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid authorization header format"
        )

    if fields[0].lower() != AUTHORIZATION_TYPE_BEARER:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"unsupported authorization type {fields[0]}"
        )

    try:
        payload = get_token_maker().verify_token(fields[1], access_token_ttl())
    except InvalidToken as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))

    return payload.username
