"""Declarative role policy for the API.

Every API route is described by one entry in ROUTE_POLICIES; a single generic
guard (see guards.py) evaluates the first entry whose prefix and method match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import AuthorizationError

_ROLE_NAMES = {
    Role.ADMIN: "admin",
    Role.TEACHER: "guru",
    Role.STUDENT: "siswa",
    Role.OPERATOR: "operator",
    Role.PARENT: "orang tua",
}

ALL_METHODS: FrozenSet[str] = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})
READ: FrozenSet[str] = frozenset({"GET"})
WRITE: FrozenSet[str] = frozenset({"POST", "PUT", "PATCH", "DELETE"})


@dataclass(frozen=True)
class RolePolicy:
    roles: FrozenSet[Role]
    admin_override: bool = False

    def allows(self, role: Role) -> bool:
        if self.admin_override and role == Role.ADMIN:
            return True
        return role in self.roles

    def describe(self) -> str:
        names = [_ROLE_NAMES[r] for r in Role if r in self.roles]
        if self.admin_override and Role.ADMIN not in self.roles:
            names.append(_ROLE_NAMES[Role.ADMIN])
        return " atau ".join(names)

    def check(self, role: Role) -> None:
        if not self.allows(role):
            raise AuthorizationError(f"Akses ditolak. Hanya {self.describe()} yang dapat mengakses fitur ini")


def only(role: Role) -> RolePolicy:
    """Single role, with the implicit admin override."""
    return RolePolicy(roles=frozenset({role}), admin_override=True)


def any_of(*roles: Role) -> RolePolicy:
    """Exactly these roles; admin passes only when listed."""
    return RolePolicy(roles=frozenset(roles), admin_override=False)


@dataclass(frozen=True)
class RouteRule:
    prefix: str
    methods: FrozenSet[str]
    policy: Optional[RolePolicy]

    def matches(self, method: str, path: str) -> bool:
        if method not in self.methods:
            return False
        path = path.rstrip("/") or "/"
        return path == self.prefix or path.startswith(self.prefix + "/")


STAFF_READERS = any_of(Role.ADMIN, Role.TEACHER, Role.OPERATOR)
SCANNERS = any_of(Role.ADMIN, Role.TEACHER, Role.OPERATOR, Role.STUDENT)
MANAGERS = any_of(Role.ADMIN, Role.OPERATOR)
ADMINS = any_of(Role.ADMIN)

# Order matters: specific prefixes before their parents.
ROUTE_POLICIES: Sequence[RouteRule] = (
    RouteRule("/api/auth/register", ALL_METHODS, ADMINS),
    RouteRule("/api/auth", ALL_METHODS, None),
    RouteRule("/api/attendance/scan", ALL_METHODS, SCANNERS),
    RouteRule("/api/attendance/history", READ, None),
    RouteRule("/api/attendance", READ, STAFF_READERS),
    RouteRule("/api/attendance", WRITE, only(Role.TEACHER)),
    RouteRule("/api/yolo/attendance", ALL_METHODS, SCANNERS),
    RouteRule("/api/yolo", READ, None),
    RouteRule("/api/students", READ, STAFF_READERS),
    RouteRule("/api/students", WRITE, MANAGERS),
    RouteRule("/api/classes", READ, STAFF_READERS),
    RouteRule("/api/classes", WRITE, ADMINS),
    RouteRule("/api/subjects", READ, STAFF_READERS),
    RouteRule("/api/subjects", WRITE, ADMINS),
    RouteRule("/api/schedules", READ, STAFF_READERS),
    RouteRule("/api/schedules", WRITE, ADMINS),
    RouteRule("/api/teachers", ALL_METHODS, MANAGERS),
    RouteRule("/api/parents/children", ALL_METHODS, only(Role.PARENT)),
    RouteRule("/api/parents", ALL_METHODS, MANAGERS),
    RouteRule("/api/operators/school-data", ALL_METHODS, only(Role.OPERATOR)),
    RouteRule("/api/operators/users", ALL_METHODS, only(Role.OPERATOR)),
    RouteRule("/api/operators/bulk-create-users", ALL_METHODS, only(Role.OPERATOR)),
    RouteRule("/api/operators", ALL_METHODS, ADMINS),
    RouteRule("/api/settings", ALL_METHODS, MANAGERS),
    RouteRule("/api/locations", READ, MANAGERS),
    RouteRule("/api/locations", WRITE, ADMINS),
    RouteRule("/api/reports", ALL_METHODS, STAFF_READERS),
)


def resolve_policy(method: str, path: str, rules: Sequence[RouteRule] = ROUTE_POLICIES) -> Optional[RolePolicy]:
    """Policy of the first matching rule; None means authentication alone is enough."""
    for rule in rules:
        if rule.matches(method, path):
            return rule.policy
    return None
