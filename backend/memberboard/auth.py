from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .config import settings
from .logging_context import set_user_context
from .services.whop_client import WhopAuthError, WhopClient


def get_whop_client() -> WhopClient:
    return WhopClient.from_settings(settings)


WhopClientDep = Annotated[WhopClient, Depends(get_whop_client)]


async def get_current_user_id(request: Request, whop: WhopClientDep) -> str:
    try:
        user_id = whop.verify_user_token(request.headers)
    except WhopAuthError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate Whop user token",
        ) from exc
    set_user_context(user_id)
    return user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
