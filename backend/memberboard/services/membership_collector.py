from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings, settings
from ..metrics import membership_collections_total, membership_pages_fetched_total
from ..schemas.memberships import MembershipCollection, MembershipPage, MembershipRecord

logger = logging.getLogger(__name__)

MEMBERSHIPS_PATH = "/api/v5/memberships"
PAGE_SIZE = 50


@dataclass(frozen=True, slots=True)
class CollectorConfig:
    api_key: str | None
    base_url: str = "https://api.whop.com"
    timeout: float | None = 10.0

    @classmethod
    def from_settings(cls, source: Settings) -> "CollectorConfig":
        return cls(
            api_key=source.whop_api_key,
            base_url=source.whop_api_base,
            timeout=source.whop_request_timeout_seconds,
        )


class MembershipCollector:
    """
    Walk the Whop memberships listing page by page until an empty page.

    Failures never propagate: the walk stops and returns what it has, with
    ``complete=False`` on the resulting collection.
    """

    def __init__(self, config: CollectorConfig) -> None:
        self._config = config

    @property
    def config(self) -> CollectorConfig:
        return self._config

    @property
    def listing_url(self) -> str:
        return f"{self._config.base_url.rstrip('/')}{MEMBERSHIPS_PATH}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.api_key or ''}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def _params(product_id: str, page: int) -> dict[str, Any]:
        # include=customer embeds the profile so no per-record lookup is needed
        return {
            "product_id": product_id,
            "status": "active",
            "page": page,
            "per": PAGE_SIZE,
            "include": "customer",
        }

    async def collect(self, product_id: str) -> MembershipCollection:
        records: list[MembershipRecord] = []
        page = 1
        error: str | None = None

        async with httpx.AsyncClient(timeout=self._config.timeout) as client:
            while True:
                try:
                    response = await client.get(
                        self.listing_url,
                        params=self._params(product_id, page),
                        headers=self._headers(),
                    )
                except httpx.HTTPError as exc:
                    error = f"request for page {page} failed: {exc.__class__.__name__}"
                    logger.warning(
                        "Membership listing request failed: product_id=%s page=%s error=%s",
                        product_id,
                        page,
                        exc,
                    )
                    break

                if not 200 <= response.status_code < 300:
                    error = f"page {page} returned status {response.status_code}"
                    logger.warning(
                        "Membership listing failed: product_id=%s page=%s status=%s",
                        product_id,
                        page,
                        response.status_code,
                    )
                    break

                try:
                    body = response.json()
                except ValueError:
                    error = f"page {page} returned a non-JSON body"
                    logger.warning(
                        "Membership listing returned non-JSON body: product_id=%s page=%s",
                        product_id,
                        page,
                    )
                    break

                if not isinstance(body, dict):
                    error = f"page {page} returned an unexpected body"
                    logger.warning(
                        "Membership listing returned unexpected body: product_id=%s page=%s",
                        product_id,
                        page,
                    )
                    break

                try:
                    page_data = MembershipPage.model_validate(body).data
                except ValidationError as exc:
                    error = f"page {page} could not be decoded"
                    logger.warning(
                        "Membership listing page invalid: product_id=%s page=%s errors=%s",
                        product_id,
                        page,
                        exc.error_count(),
                    )
                    break

                if not page_data:
                    break

                records.extend(page_data)
                membership_pages_fetched_total.inc()
                page += 1

        collection = MembershipCollection(
            records=records,
            complete=error is None,
            pages_fetched=page - 1,
            error=error,
        )
        membership_collections_total.labels(
            outcome="complete" if collection.complete else "truncated"
        ).inc()
        logger.info(
            "Collected active memberships: product_id=%s count=%s pages=%s complete=%s",
            product_id,
            len(records),
            collection.pages_fetched,
            collection.complete,
        )
        return collection

    async def collect_active_memberships(self, product_id: str) -> list[MembershipRecord]:
        collection = await self.collect(product_id)
        return collection.records


def get_membership_collector() -> MembershipCollector:
    return MembershipCollector(CollectorConfig.from_settings(settings))


__all__ = [
    "CollectorConfig",
    "MEMBERSHIPS_PATH",
    "MembershipCollector",
    "PAGE_SIZE",
    "get_membership_collector",
]
