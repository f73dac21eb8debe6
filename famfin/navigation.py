"""
Sidebar menus per role. The client renders whichever menu the server sends
back for the session; it never picks one from its own stored role.
"""

from typing import Dict, List

from .db.models import Role

ADMIN_MENU: List[Dict[str, str]] = [
    {"title": "Admin", "navigate": "/admin"},
    {"title": "Budget", "navigate": "/admin/budget"},
    {"title": "Pocket money planning", "navigate": "/admin/pocket-money"},
    {"title": "Users", "navigate": "/admin/users"},
    {"title": "Tasks", "navigate": "/admin/tasks"},
]

USER_MENU: List[Dict[str, str]] = [
    {"title": "Cash flow", "navigate": "/user/cash-flow"},
    {"title": "Overview", "navigate": "/user/overview"},
    {"title": "Goals", "navigate": "/user/goals"},
    {"title": "Tasks", "navigate": "/user/my-tasks"},
]


def menu_for(role: Role) -> List[Dict[str, str]]:
    if Role(role) == Role.ADMIN:
        return [dict(item) for item in ADMIN_MENU]
    return [dict(item) for item in USER_MENU]
