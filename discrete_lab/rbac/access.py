"""Role-based access control: roles, members and the simulated permission check.

Users sharing a role are equivalent, so the roles partition the user set;
``partition_by_role`` returns those equivalence classes.
"""

import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

import structlog

logger = structlog.get_logger(__name__)


class Permission(str, Enum):
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    ADMIN = "admin"


@dataclass(frozen=True)
class Role:
    name: str
    permissions: frozenset[Permission] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "permissions",
            frozenset(Permission(p) for p in self.permissions),
        )


@dataclass(frozen=True)
class Member:
    """A user of the access-controlled system and the name of their role."""

    id: str
    name: str
    role: str


class AccessPolicy:
    """Roles and members, with a fail-closed permission check.

    Example:
        >>> policy = AccessPolicy.default()
        >>> policy.check_permission("1", "delete")
        True
        >>> policy.check_permission("3", Permission.WRITE)
        False
    """

    def __init__(self, roles: Iterable[Role] = (), members: Iterable[Member] = ()):
        self._roles: dict[str, Role] = {role.name: role for role in roles}
        self._members: dict[str, Member] = {m.id: m for m in members}

    @classmethod
    def default(cls) -> "AccessPolicy":
        """Admin, Editor and Viewer roles with five sample users."""
        roles = [
            Role("Admin", frozenset(Permission)),
            Role("Editor", frozenset({Permission.READ, Permission.WRITE})),
            Role("Viewer", frozenset({Permission.READ})),
        ]
        members = [
            Member("1", "Alice", "Admin"),
            Member("2", "Bob", "Editor"),
            Member("3", "Charlie", "Viewer"),
            Member("4", "Diana", "Editor"),
            Member("5", "Evan", "Viewer"),
        ]
        return cls(roles, members)

    @property
    def roles(self) -> list[Role]:
        return list(self._roles.values())

    @property
    def members(self) -> list[Member]:
        return list(self._members.values())

    def get_member(self, member_id: str) -> Member | None:
        return self._members.get(member_id)

    def add_member(self, name: str, role: str) -> Member:
        """Add a member with a time-based id.

        The role is not checked; members of unknown roles are denied everything.

        Raises:
            ValueError: If the name is empty
        """
        if not name.strip():
            msg = "Member name must not be empty"
            raise ValueError(msg)

        member_id = str(time.time_ns())
        while member_id in self._members:
            member_id = str(int(member_id) + 1)
        member = Member(member_id, name, role)
        self._members[member_id] = member

        if role not in self._roles:
            logger.warning("member_added_with_unknown_role", member_id=member_id, role=role)
        return member

    def remove_member(self, member_id: str) -> None:
        if self._members.pop(member_id, None) is None:
            logger.warning("remove_unknown_member", member_id=member_id)

    def check_permission(self, member_id: str, permission: Permission | str) -> bool:
        """Decide whether a member may perform an action.

        True only when the member exists, their role exists and the role
        grants the permission. Unknown members, roles or permission names
        are denied.
        """
        member = self._members.get(member_id)
        if member is None:
            logger.info("permission_denied", member_id=member_id, reason="unknown_member")
            return False

        role = self._roles.get(member.role)
        if role is None:
            logger.info(
                "permission_denied",
                member_id=member_id,
                role=member.role,
                reason="unknown_role",
            )
            return False

        try:
            requested = Permission(permission)
        except ValueError:
            logger.info(
                "permission_denied",
                member_id=member_id,
                permission=str(permission),
                reason="unknown_permission",
            )
            return False

        allowed = requested in role.permissions
        logger.info(
            "permission_checked",
            member_id=member_id,
            role=role.name,
            permission=requested.value,
            allowed=allowed,
        )
        return allowed

    def partition_by_role(self) -> dict[str, list[Member]]:
        """Group members into the equivalence classes of "has the same role".

        Every defined role is present, possibly with no members. Members of
        undefined roles get a class under their role name as well.
        """
        classes: dict[str, list[Member]] = {name: [] for name in self._roles}
        for member in self._members.values():
            classes.setdefault(member.role, []).append(member)
        return classes
