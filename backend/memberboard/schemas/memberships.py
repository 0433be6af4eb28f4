from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Ids and timestamps are passed through as sent; the API uses both strings and epoch numbers.
OpaqueValue = Optional[Union[str, int, float]]


class CustomerProfile(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: OpaqueValue = None
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    profile_pic_url: Optional[str] = None
    profile_pic_url_32: Optional[str] = None
    profile_pic_url_64: Optional[str] = None
    profile_pic_url_128: Optional[str] = None
    created_at: OpaqueValue = None


class MembershipRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: OpaqueValue = None
    status: Optional[str] = None
    customer: Optional[CustomerProfile] = None
    created_at: OpaqueValue = None
    updated_at: OpaqueValue = None


class MembershipPage(BaseModel):
    """One decoded page of the memberships listing endpoint."""

    model_config = ConfigDict(extra="ignore")

    data: list[MembershipRecord] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def _missing_data(cls, value):
        if value is None:
            return []
        return value


class MembershipCollection(BaseModel):
    """
    Flat result of a full page-walk.

    ``complete`` is only true when the walk ended on an empty page; a failed
    request leaves whatever was gathered so far in ``records`` and explains
    the stop in ``error``.
    """

    records: list[MembershipRecord] = Field(default_factory=list)
    complete: bool = True
    pages_fetched: int = 0
    error: Optional[str] = None


__all__ = [
    "CustomerProfile",
    "MembershipCollection",
    "MembershipPage",
    "MembershipRecord",
]
