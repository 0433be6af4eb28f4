from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse

from ..auth import CurrentUserId, WhopClientDep
from ..config import settings
from ..logging_context import set_resource_context
from ..schemas.memberships import MembershipCollection
from ..services.membership_collector import MembershipCollector, get_membership_collector
from ..services.whop_client import WhopAPIError
from ..templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

CollectorDep = Annotated[MembershipCollector, Depends(get_membership_collector)]


@router.get("/{company_id}", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    company_id: str,
    user_id: CurrentUserId,
    whop: WhopClientDep,
    collector: CollectorDep,
):
    set_resource_context(company_id)
    try:
        access = await whop.check_access(user_id, company_id)
        user = await whop.get_user(user_id)
        company = await whop.get_company(company_id)
    except WhopAPIError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Whop API unavailable",
        ) from exc

    product_id = settings.whop_product_id
    collection: MembershipCollection | None = None
    if product_id:
        collection = await collector.collect(product_id)
    else:
        logger.error("WHOP_PRODUCT_ID is not set in the environment variables.")

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "company_id": company_id,
            "company": company,
            "user": user,
            "user_id": user_id,
            "access": access,
            "product_id": product_id,
            "members": collection.records if collection else [],
            "collection": collection,
            "debug": settings.is_development,
        },
    )
