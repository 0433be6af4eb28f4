from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class AccessLevel(str, Enum):
    admin = "admin"
    customer = "customer"
    no_access = "no_access"


class AccessCheck(BaseModel):
    has_access: bool = False
    access_level: AccessLevel = AccessLevel.no_access


class WhopUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None
    username: Optional[str] = None


class WhopCompany(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: Optional[str] = None


class WhopExperience(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None
