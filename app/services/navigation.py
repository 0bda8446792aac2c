"""Dashboard navigation, built per role on every call."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MenuItem:
    name: str
    href: str
    icon: str | None = None

    @property
    def is_divider(self) -> bool:
        return self.href == "#"


DIVIDER = MenuItem("Divider", "#")

_BASE_ITEMS = (
    MenuItem("Dashboard", "/dashboard", "home"),
    MenuItem("My Properties", "/dashboard/properties", "building-office"),
    MenuItem("Favorites", "/dashboard/favorites", "heart"),
    MenuItem("Profile", "/dashboard/profile", "user"),
)

_ADD_PROPERTY = MenuItem("Add Property", "/dashboard/properties/add", "plus")

_ADMIN_ITEMS = (
    MenuItem("Admin Dashboard", "/admin", "cog"),
    MenuItem("Manage Users", "/admin/users", "user-group"),
    MenuItem("Manage Properties", "/admin/properties", "building-office"),
    MenuItem("Sales Management", "/admin/sales", "currency-dollar"),
    MenuItem("Manage Schedules", "/admin/schedules", "calendar"),
    MenuItem("Settings", "/admin/settings", "cog"),
)

# Roles offered the listing form
LISTING_ROLES = frozenset({"seller", "agent", "admin"})


def menu_for(role: str | None) -> tuple[MenuItem, ...]:
    """Ordered sidebar entries for a role.

    "Add Property" goes right after "My Properties"; admins get a divider
    followed by the admin section.
    """
    items = list(_BASE_ITEMS)
    if role in LISTING_ROLES:
        items.insert(2, _ADD_PROPERTY)
    if role == "admin":
        items.append(DIVIDER)
        items.extend(_ADMIN_ITEMS)
    return tuple(items)
