"""新建订单页。"""

from __future__ import annotations

import logging

from ewallet_e2e.locators import LocatorChain
from ewallet_e2e.pages.base_page import BasePage, text_pattern
from ewallet_e2e.pages.dashboard_page import DashboardPage

logger = logging.getLogger(__name__)

PAGE_TITLE = LocatorChain(
    "add_new_order_title",
    [("role", lambda p: p.get_by_role("heading", name=text_pattern(r"add new order")))],
)
ORDER_FORM = LocatorChain(
    "order_form",
    [
        # 页面上还有退出登录的表单
        ("form", lambda p: p.locator('form:not([action*="logout"])')),
    ],
)
IMPORT_ORDERS_BUTTON = LocatorChain(
    "import_orders_button",
    [
        ("fi_btn", lambda p: p.locator("button.fi-btn").filter(has_text=text_pattern(r"import orders"))),
        ("role", lambda p: p.get_by_role("button", name=text_pattern(r"import orders"))),
    ],
)
PAGE_BODY = LocatorChain(
    "add_new_order_body",
    [
        ("form", lambda p: p.locator('form:not([action*="logout"])')),
        ("import_orders_button", lambda p: p.get_by_role("button", name=text_pattern(r"import orders"))),
    ],
)


class AddNewOrderPage(BasePage):
    """从仪表盘进入的新建订单页面。"""

    def open_from_dashboard(self) -> None:
        DashboardPage(self.page, self.base_url, self.timeout).click_add_new_order()
        self.wait_for_page_load()
        logger.info("已进入新建订单页: %s", self.page.url)

    def verify_loaded(self) -> None:
        """标题必须出现；表单与导入按钮至少出现其一。"""
        self.resolve(PAGE_TITLE)
        self.resolve(PAGE_BODY, timeout_ms=10_000)

    def is_loaded(self) -> bool:
        return self.is_visible(PAGE_TITLE)

    def page_title(self) -> str:
        return self.text_of(PAGE_TITLE)

    def is_form_visible(self) -> bool:
        return self.is_visible(ORDER_FORM)

    def form_field_count(self) -> int:
        form = ORDER_FORM.first_match(self.page)
        if form is None:
            return 0
        return form.locator("input, select, textarea").count()

    def is_import_orders_button_visible(self) -> bool:
        return self.is_visible(IMPORT_ORDERS_BUTTON)

    def is_import_orders_button_enabled(self) -> bool:
        button = IMPORT_ORDERS_BUTTON.first_match(self.page)
        return button is not None and button.is_enabled()

    def click_import_orders(self) -> None:
        self.resolve(IMPORT_ORDERS_BUTTON).click()

