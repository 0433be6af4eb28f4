from typing import Any

from memberboard.schemas.memberships import MembershipCollection, MembershipRecord
from memberboard.schemas.platform import (
    AccessCheck,
    AccessLevel,
    WhopCompany,
    WhopExperience,
    WhopUser,
)
from memberboard.services.whop_client import USER_TOKEN_HEADER, WhopAPIError, WhopAuthError

AUTH_HEADERS = {USER_TOKEN_HEADER: "valid-token"}


def membership_payload(index: int, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": f"mem_{index}",
        "status": "active",
        "created_at": "2025-01-05T12:00:00Z",
        "updated_at": "2025-01-06T12:00:00Z",
        "customer": {
            "id": f"user_{index}",
            "name": f"Member {index}",
            "username": f"member{index}",
            "email": f"member{index}@example.com",
            "profile_pic_url": None,
            "profile_pic_url_32": None,
            "profile_pic_url_64": None,
            "profile_pic_url_128": None,
            "created_at": "2024-12-01T00:00:00Z",
        },
    }
    payload.update(overrides)
    return payload


class FakeWhopClient:
    def __init__(self) -> None:
        self.access = AccessCheck(has_access=True, access_level=AccessLevel.admin)
        self.user = WhopUser(id="user_admin", name="Ada", username="ada")
        self.company = WhopCompany(id="biz_1", title="Acme")
        self.experience = WhopExperience(id="exp_1", name="Inner Circle")
        self.fail_with: WhopAPIError | None = None
        self.access_checks: list[tuple[str, str]] = []

    def verify_user_token(self, headers) -> str:
        if headers.get(USER_TOKEN_HEADER) != "valid-token":
            raise WhopAuthError("invalid token")
        return self.user.id

    async def check_access(self, user_id: str, resource_id: str) -> AccessCheck:
        if self.fail_with is not None:
            raise self.fail_with
        self.access_checks.append((user_id, resource_id))
        return self.access

    async def get_user(self, user_id: str) -> WhopUser:
        return self.user

    async def get_company(self, company_id: str) -> WhopCompany:
        return self.company

    async def get_experience(self, experience_id: str) -> WhopExperience:
        return self.experience


class FakeCollector:
    def __init__(self) -> None:
        self.records: list[MembershipRecord] = []
        self.complete = True
        self.calls: list[str] = []

    async def collect(self, product_id: str) -> MembershipCollection:
        self.calls.append(product_id)
        return MembershipCollection(
            records=list(self.records),
            complete=self.complete,
            pages_fetched=1 if self.records else 0,
            error=None if self.complete else "page 2 returned status 500",
        )

    async def collect_active_memberships(self, product_id: str) -> list[MembershipRecord]:
        return (await self.collect(product_id)).records
