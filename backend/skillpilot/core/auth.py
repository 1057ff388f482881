"""Caller identity.

Sign-in is handled by the hosted authentication provider in front of this
service. By the time a request reaches us the provider's gateway has put the
verified user id in the ``X-User-Id`` header; this module only reads it.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

USER_ID_HEADER = "X-User-Id"


def get_auth_user(
    x_user_id: Annotated[str | None, Header(alias=USER_ID_HEADER)] = None,
) -> str:
    """Return the authenticated user id or answer 401.

    Example:
        @router.post("/items")
        async def create_item(user_id: CurrentUserDep):
            return {"user_id": user_id}
    """
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return user_id


def get_optional_user(
    x_user_id: Annotated[str | None, Header(alias=USER_ID_HEADER)] = None,
) -> str | None:
    """Return the user id when present; anonymous callers get None."""
    user_id = (x_user_id or "").strip()
    return user_id or None


# Type aliases for FastAPI dependencies
CurrentUserDep = Annotated[str, Depends(get_auth_user)]
OptionalUserDep = Annotated[str | None, Depends(get_optional_user)]
