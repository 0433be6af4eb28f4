from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse

from ..auth import CurrentUserId, WhopClientDep
from ..config import settings
from ..logging_context import set_resource_context
from ..schemas.memberships import MembershipRecord
from ..services.membership_collector import MembershipCollector, get_membership_collector
from ..services.whop_client import WhopAPIError
from ..templating import templates

router = APIRouter(prefix="/experiences", tags=["experiences"])


@router.get("/{experience_id}", response_class=HTMLResponse)
async def experience_page(
    request: Request,
    experience_id: str,
    user_id: CurrentUserId,
    whop: WhopClientDep,
    collector: Annotated[MembershipCollector, Depends(get_membership_collector)],
):
    set_resource_context(experience_id)
    try:
        access = await whop.check_access(user_id, experience_id)
        user = await whop.get_user(user_id)
        experience = await whop.get_experience(experience_id)
    except WhopAPIError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Whop API unavailable",
        ) from exc

    product_id = settings.whop_product_id
    members: list[MembershipRecord] = []
    if product_id:
        members = await collector.collect_active_memberships(product_id)

    return templates.TemplateResponse(
        request,
        "experience.html",
        {
            "experience_id": experience_id,
            "experience": experience,
            "user": user,
            "user_id": user_id,
            "access": access,
            "product_id": product_id,
            "members": members,
            "debug": settings.is_development,
        },
    )
