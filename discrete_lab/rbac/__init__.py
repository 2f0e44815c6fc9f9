"""Role-based access control (simulated permission checks)."""

from discrete_lab.rbac.access import AccessPolicy, Member, Permission, Role

__all__ = ["AccessPolicy", "Member", "Permission", "Role"]
