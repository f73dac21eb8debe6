from famfin.db.models import Role
from famfin.navigation import ADMIN_MENU, USER_MENU, menu_for


def test_admin_menu():
    menu = menu_for(Role.ADMIN)
    assert menu == ADMIN_MENU
    assert {"title": "Budget", "navigate": "/admin/budget"} in menu


def test_user_menu():
    menu = menu_for("USER")
    assert menu == USER_MENU
    assert all(item["navigate"].startswith("/user/") for item in menu)


def test_menu_is_a_copy():
    menu = menu_for(Role.USER)
    menu[0]["title"] = "changed"
    assert USER_MENU[0]["title"] == "Cash flow"
