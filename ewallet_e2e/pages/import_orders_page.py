"""批量导入订单弹窗。"""

from __future__ import annotations

import logging
from pathlib import Path

from playwright.sync_api import Download
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ewallet_e2e.exceptions import LocatorNotFound
from ewallet_e2e.locators import LocatorChain
from ewallet_e2e.pages.add_new_order_page import AddNewOrderPage
from ewallet_e2e.pages.base_page import ELEMENT_TIMEOUT_MS, BasePage, text_pattern

logger = logging.getLogger(__name__)

MODAL_SELECTOR = '[x-data*="import-orders-form"]'

# 弹窗由 Alpine.js 控制：带 fi-modal-open 且 x-show 内容未隐藏才算真正打开
MODAL_OPEN_SCRIPT = """
(selector) => {
    const modal = document.querySelector(selector);
    if (!modal) return false;
    const content = modal.querySelector('[x-show="isOpen"]');
    return modal.classList.contains('fi-modal-open') && !!content && content.style.display !== 'none';
}
"""

IMPORT_MODAL = LocatorChain(
    "import_orders_modal",
    [
        ("x_data", lambda p: p.locator(MODAL_SELECTOR)),
        ("test_id", lambda p: p.locator('[data-testid="import-orders-form"]')),
        ("dialog", lambda p: p.get_by_role("dialog").filter(has_text=text_pattern(r"import orders"))),
    ],
)
MODAL_CLOSE_BUTTON = LocatorChain(
    "modal_close_button",
    [
        ("role", lambda p: p.get_by_role("button", name=text_pattern(r"close"))),
        ("aria", lambda p: p.locator('[aria-label="Close"]')),
        ("class", lambda p: p.locator(".close, .btn-close")),
    ],
)
FILE_INPUT = LocatorChain(
    "file_input",
    [
        ("type", lambda p: p.locator('input[type="file"]')),
        ("test_id", lambda p: p.locator('[data-testid="file-upload"]')),
    ],
)
DOWNLOAD_TEMPLATE_BUTTON = LocatorChain(
    "download_template_button",
    [
        ("role", lambda p: p.get_by_role("button", name=text_pattern(r"download template"))),
        ("link", lambda p: p.get_by_role("link", name=text_pattern(r"download template"))),
        ("text", lambda p: p.get_by_text(text_pattern(r"download template"))),
    ],
)
SUBMIT_BUTTON = LocatorChain(
    "import_submit_button",
    [
        (
            "wire_target",
            lambda p: p.locator('button[type="submit"]')
            .filter(has_text=text_pattern(r"import orders"))
            .filter(has=p.locator('[wire\\:target="import"]')),
        ),
        ("fi_btn_submit", lambda p: p.locator('button.fi-btn[type="submit"]').filter(has_text=text_pattern(r"import orders"))),
    ],
)
INSTRUCTIONS = LocatorChain(
    "import_instructions",
    [
        ("section_description", lambda p: p.locator("p.fi-section-header-description").filter(has_text=text_pattern(r"import orders|excel|csv"))),
        ("helper_text", lambda p: p.locator("div.fi-fo-field-wrp-helper-text").filter(has_text=text_pattern(r"excel|csv|file size"))),
    ],
)
FILE_PREVIEW = LocatorChain(
    "file_preview",
    [
        ("filepond_item", lambda p: p.locator(".filepond--item")),
        ("test_id", lambda p: p.locator('[data-testid="file-preview"]')),
        ("class", lambda p: p.locator(".file-preview, .file-info")),
    ],
)
CONFIRMATION_MESSAGE = LocatorChain(
    "import_confirmation",
    [
        ("notification_success", lambda p: p.locator(".fi-no-notification").filter(has_text=text_pattern(r"import|success|queued"))),
        ("test_id", lambda p: p.locator('[data-testid="success-message"]')),
        ("class", lambda p: p.locator(".alert-success, .success-message")),
    ],
)
ERROR_MESSAGE = LocatorChain(
    "import_error",
    [
        ("field_error", lambda p: p.locator(".fi-fo-field-wrp-error-message")),
        ("test_id", lambda p: p.locator('[data-testid="error-message"]')),
        ("class", lambda p: p.locator(".alert-danger, .error-message")),
    ],
)


class ImportOrdersPage(BasePage):
    """仪表盘 → 新建订单 → 导入订单 弹窗。"""

    def open_from_dashboard(self) -> None:
        self.wait_for_page_load()
        add_new_order = AddNewOrderPage(self.page, self.base_url, self.timeout)
        add_new_order.open_from_dashboard()
        add_new_order.click_import_orders()
        self.wait_for_modal()
        logger.info("导入订单弹窗已打开")

    def wait_for_modal(self) -> None:
        self.resolve(IMPORT_MODAL, require_visible=False)
        try:
            self.page.wait_for_function(MODAL_OPEN_SCRIPT, arg=MODAL_SELECTOR, timeout=ELEMENT_TIMEOUT_MS)
        except PlaywrightTimeoutError:
            # 非 Alpine 渲染的弹窗没有 fi-modal-open 标记
            logger.warning("未检测到弹窗打开标记，改为等待网络空闲")
            self.wait_for_page_load()

    def is_modal_visible(self) -> bool:
        modal = IMPORT_MODAL.first_match(self.page, require_visible=False)
        if modal is None:
            return False
        if modal.evaluate("(el) => el.classList.contains('fi-modal-open')"):
            return True
        return modal.is_visible()

    def close_modal(self) -> bool:
        button = MODAL_CLOSE_BUTTON.first_match(self.page)
        if button is None:
            return False
        button.click()
        return True

    def upload_file(self, file_path: Path | str) -> None:
        path = Path(file_path)
        logger.info("上传导入文件: %s", path.name)
        self.resolve(FILE_INPUT, require_visible=False).set_input_files(str(path))
        self.wait_for_page_load()

    def is_file_uploaded(self) -> bool:
        return self.is_visible(FILE_PREVIEW)

    def click_download_template(self) -> Download:
        with self.page.expect_download(timeout=self.timeout) as download_info:
            self.resolve(DOWNLOAD_TEMPLATE_BUTTON).click()
        download = download_info.value
        logger.info("已下载导入模板: %s", download.suggested_filename)
        return download

    def is_download_template_visible(self) -> bool:
        return self.is_visible(DOWNLOAD_TEMPLATE_BUTTON)

    def is_submit_visible(self) -> bool:
        return self.is_visible(SUBMIT_BUTTON)

    def submit_import(self) -> None:
        self.resolve(SUBMIT_BUTTON).click()
        self.wait_for_page_load()

    def wait_for_import_completion(self, timeout_ms: float = 20_000) -> bool:
        """等待成功提示，超时返回 False 交由用例断言。"""
        self.wait_for_page_load()
        try:
            self.resolve(CONFIRMATION_MESSAGE, timeout_ms=timeout_ms)
        except LocatorNotFound as exc:
            logger.info("未出现导入成功提示: %s", exc)
            return False
        return True

    def confirmation_message(self) -> str:
        return self.text_of(CONFIRMATION_MESSAGE)

    def error_message(self) -> str:
        return self.text_of(ERROR_MESSAGE)

    def instructions_text(self) -> str:
        return self.text_of(INSTRUCTIONS)
