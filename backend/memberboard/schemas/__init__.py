from .memberships import (
    CustomerProfile,
    MembershipCollection,
    MembershipPage,
    MembershipRecord,
)
from .platform import AccessCheck, AccessLevel, WhopCompany, WhopExperience, WhopUser

__all__ = [
    "AccessCheck",
    "AccessLevel",
    "CustomerProfile",
    "MembershipCollection",
    "MembershipPage",
    "MembershipRecord",
    "WhopCompany",
    "WhopExperience",
    "WhopUser",
]
