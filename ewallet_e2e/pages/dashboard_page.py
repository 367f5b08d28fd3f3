"""后台仪表盘。"""

from __future__ import annotations

import logging

from ewallet_e2e.config import LOGOUT_PATH
from ewallet_e2e.locators import LocatorChain
from ewallet_e2e.pages.base_page import BasePage, text_pattern

logger = logging.getLogger(__name__)

DASHBOARD_HEADING = LocatorChain(
    "dashboard_heading",
    [
        ("role", lambda p: p.get_by_role("heading", name=text_pattern(r"dashboard"))),
        ("text", lambda p: p.locator("h1, h2").filter(has_text=text_pattern(r"dashboard"))),
    ],
)
USER_MENU_BUTTON = LocatorChain(
    "user_menu_button",
    [
        ("role", lambda p: p.get_by_role("button", name=text_pattern(r"user menu"))),
        ("avatar", lambda p: p.locator(".fi-user-menu button, .fi-user-avatar")),
    ],
)
LOGOUT_CONTROL = LocatorChain(
    "logout_control",
    [
        ("button", lambda p: p.get_by_role("button", name=text_pattern(r"log ?out|sign out"))),
        ("link", lambda p: p.get_by_role("link", name=text_pattern(r"log ?out|sign out"))),
    ],
)
ADD_NEW_ORDER_BUTTON = LocatorChain(
    "add_new_order_button",
    [
        ("fi_btn", lambda p: p.locator("button.fi-btn, a.fi-btn").filter(has_text=text_pattern(r"add new order"))),
        ("button", lambda p: p.get_by_role("button", name=text_pattern(r"add new order"))),
        ("link", lambda p: p.get_by_role("link", name=text_pattern(r"add new order"))),
    ],
)


class DashboardPage(BasePage):
    """登录后的落地页。"""

    def verify_loaded(self) -> None:
        self.resolve(DASHBOARD_HEADING, timeout_ms=self.timeout)

    def is_loaded(self) -> bool:
        return self.is_visible(DASHBOARD_HEADING)

    def is_add_new_order_button_visible(self) -> bool:
        return self.is_visible(ADD_NEW_ORDER_BUTTON)

    def click_add_new_order(self) -> None:
        self.resolve(ADD_NEW_ORDER_BUTTON).click()

    def logout(self) -> None:
        """依次尝试用户菜单、直接的退出入口，最后直接访问退出地址。"""
        menu = USER_MENU_BUTTON.first_match(self.page)
        if menu is not None:
            menu.click()

        control = LOGOUT_CONTROL.first_match(self.page)
        if control is not None:
            control.click()
            return

        logger.info("未找到退出入口，直接访问 %s", LOGOUT_PATH)
        self.goto(LOGOUT_PATH)
