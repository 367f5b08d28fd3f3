"""二次验证（TOTP）页。"""

from __future__ import annotations

from ewallet_e2e.locators import LocatorChain
from ewallet_e2e.pages.base_page import BasePage, text_pattern

OTP_INPUT = LocatorChain(
    "otp_input",
    [
        ("placeholder", lambda p: p.get_by_placeholder(text_pattern(r"2fa code|6-digit code|authentication code"))),
        ("one_time_code", lambda p: p.locator('input[autocomplete="one-time-code"]')),
        ("text_or_tel", lambda p: p.locator('input[type="text"], input[type="tel"]')),
    ],
)
VERIFY_BUTTON = LocatorChain(
    "verify_button",
    [
        ("role", lambda p: p.get_by_role("button", name=text_pattern(r"verify"))),
        ("submit", lambda p: p.locator('button[type="submit"]')),
    ],
)
OTP_ERROR = LocatorChain(
    "otp_error",
    [
        ("field_error", lambda p: p.locator(".fi-fo-field-wrp-error-message")),
        ("alert", lambda p: p.get_by_role("alert")),
        ("invalid_text", lambda p: p.get_by_text(text_pattern(r"invalid (2fa |verification |authentication )?code|code is (invalid|incorrect|expired)"))),
    ],
)


class TwoFactorPage(BasePage):
    """输入并提交 6 位验证码。"""

    def enter_code(self, code: str) -> None:
        self.resolve(OTP_INPUT).fill(code)

    def click_verify(self) -> None:
        self.resolve(VERIFY_BUTTON).click()

    def submit_code(self, code: str) -> None:
        self.enter_code(code)
        self.click_verify()

    def error_message(self) -> str:
        """验证码错误提示文本，未显示时返回空字符串。"""
        return self.text_of(OTP_ERROR)
