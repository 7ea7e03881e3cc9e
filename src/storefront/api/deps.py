"""Request dependencies: caller identity supplied by the upstream auth layer."""

from fastapi import Header, HTTPException

from storefront.utils.logging import add_context


def current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """The authenticated user's id, taken from the ``X-User-Id`` header."""
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authorized, no user")
    add_context(user_id=user_id)
    return user_id
