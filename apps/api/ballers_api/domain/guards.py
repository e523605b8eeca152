"""Access control guards over the request principal.

Guards are plain predicates returning :class:`Allow` or :class:`Deny`; the
request pipeline turns the first denial into the response.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ballers_api.errors import ErrorKind
from ballers_api.schemas.auth import Principal, Role


@dataclass(frozen=True, slots=True)
class Allow:
    pass


@dataclass(frozen=True, slots=True)
class Deny:
    kind: ErrorKind
    reason: str


GuardResult = Allow | Deny
Guard = Callable[[Principal | None], GuardResult]

ALLOW = Allow()
MISSING_TOKEN = Deny(ErrorKind.MISSING_TOKEN, ErrorKind.MISSING_TOKEN.default_message)
FORBIDDEN = Deny(ErrorKind.FORBIDDEN, ErrorKind.FORBIDDEN.default_message)


def has_any_role(*roles: Role) -> Guard:
    allowed = frozenset(roles)

    def guard(principal: Principal | None) -> GuardResult:
        if principal is None:
            return MISSING_TOKEN
        return ALLOW if principal.role in allowed else FORBIDDEN

    guard.__name__ = "has_any_role(" + ",".join(sorted(role.value for role in allowed)) + ")"
    return guard


def has_role(role: Role) -> Guard:
    return has_any_role(role)


def is_verified_vendor(principal: Principal | None) -> GuardResult:
    if principal is None:
        return MISSING_TOKEN
    return ALLOW if principal.is_verified_vendor else FORBIDDEN


def is_unverified_vendor_allowed(principal: Principal | None) -> GuardResult:
    """Any vendor, verified or not."""
    if principal is None:
        return MISSING_TOKEN
    return ALLOW if principal.role is Role.VENDOR else FORBIDDEN


def check_all(guards: Iterable[Guard], principal: Principal | None) -> GuardResult:
    for guard in guards:
        result = guard(principal)
        if isinstance(result, Deny):
            return result
    return ALLOW


__all__ = [
    "ALLOW",
    "Allow",
    "Deny",
    "Guard",
    "GuardResult",
    "check_all",
    "has_any_role",
    "has_role",
    "is_unverified_vendor_allowed",
    "is_verified_vendor",
]
