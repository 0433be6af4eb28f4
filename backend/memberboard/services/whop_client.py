from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx
from jose import JWTError, jwt
from pydantic import ValidationError

from ..config import Settings
from ..schemas.platform import (
    AccessCheck,
    AccessLevel,
    WhopCompany,
    WhopExperience,
    WhopUser,
)

logger = logging.getLogger(__name__)

USER_TOKEN_HEADER = "x-whop-user-token"
USER_TOKEN_ISSUER = "urn:whopcom:exp-proxy"
USER_TOKEN_ALGORITHM = "ES256"


class WhopError(RuntimeError):
    """Base error for calls into the Whop platform."""


class WhopAuthError(WhopError):
    """Raised when the per-request user token is missing or invalid."""


class WhopAPIError(WhopError):
    """Raised when the Whop REST API returns an unexpected response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class WhopClient:
    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str = "https://api.whop.com",
        app_id: str | None = None,
        app_public_key: str | None = None,
        timeout: float | None = 10.0,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._app_id = app_id
        self._app_public_key = app_public_key
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "WhopClient":
        return cls(
            api_key=settings.whop_api_key,
            base_url=settings.whop_api_base,
            app_id=settings.whop_app_id,
            app_public_key=settings.whop_app_public_key,
            timeout=settings.whop_request_timeout_seconds,
        )

    def verify_user_token(self, headers: Mapping[str, str]) -> str:
        """Return the user id carried by the experience proxy token."""
        token = headers.get(USER_TOKEN_HEADER) or headers.get(USER_TOKEN_HEADER.title())
        if not token:
            raise WhopAuthError("Whop user token missing")
        if not self._app_public_key:
            raise WhopAuthError("WHOP_APP_PUBLIC_KEY is not configured")

        options = {"verify_aud": bool(self._app_id)}
        try:
            claims = jwt.decode(
                token,
                self._app_public_key,
                algorithms=[USER_TOKEN_ALGORITHM],
                issuer=USER_TOKEN_ISSUER,
                audience=self._app_id,
                options=options,
            )
        except JWTError as exc:
            raise WhopAuthError("Whop user token verification failed") from exc

        user_id = claims.get("sub")
        if not user_id:
            raise WhopAuthError("Whop user token missing subject")
        return str(user_id)

    async def _get(self, path: str) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            try:
                response = await client.get(
                    url,
                    headers={
                        "Authorization": f"Bearer {self._api_key or ''}",
                        "Content-Type": "application/json",
                    },
                )
            except httpx.HTTPError as exc:
                logger.warning("Whop request failed: path=%s error=%s", path, exc)
                raise WhopAPIError(f"Request to {path} failed") from exc

        if response.status_code >= 400:
            logger.warning(
                "Whop request failed: path=%s status=%s",
                path,
                response.status_code,
            )
            raise WhopAPIError(
                f"Whop request failed with status {response.status_code}",
                status_code=response.status_code,
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise WhopAPIError(f"Whop returned a non-JSON body for {path}") from exc
        if not isinstance(data, dict):
            raise WhopAPIError(f"Whop returned an unexpected body for {path}")
        return data

    async def check_access(self, user_id: str, resource_id: str) -> AccessCheck:
        data = await self._get(f"/api/v5/app/users/{user_id}/access/{resource_id}")
        level = data.get("access_level")
        if level not in {item.value for item in AccessLevel}:
            level = AccessLevel.no_access
        return AccessCheck(has_access=bool(data.get("has_access")), access_level=level)

    async def get_user(self, user_id: str) -> WhopUser:
        data = await self._get(f"/api/v5/app/users/{user_id}")
        return _parse(WhopUser, data)

    async def get_company(self, company_id: str) -> WhopCompany:
        data = await self._get(f"/api/v5/app/companies/{company_id}")
        return _parse(WhopCompany, data)

    async def get_experience(self, experience_id: str) -> WhopExperience:
        data = await self._get(f"/api/v5/app/experiences/{experience_id}")
        return _parse(WhopExperience, data)


def _parse(model, data: dict[str, Any]):
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise WhopAPIError(f"Unexpected {model.__name__} payload") from exc


__all__ = [
    "USER_TOKEN_HEADER",
    "WhopAPIError",
    "WhopAuthError",
    "WhopClient",
    "WhopError",
]
