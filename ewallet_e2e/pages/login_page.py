"""登录页。"""

from __future__ import annotations

import logging
import re

from ewallet_e2e.config import LOGIN_PATH, TWO_FACTOR_PATH
from ewallet_e2e.locators import LocatorChain
from ewallet_e2e.pages.base_page import BasePage, text_pattern

logger = logging.getLogger(__name__)

EMAIL_INPUT = LocatorChain(
    "email_input",
    [
        ("label", lambda p: p.get_by_label(text_pattern(r"email address"))),
        ("type", lambda p: p.locator('input[type="email"]')),
        ("name", lambda p: p.locator('input[name="email"]')),
    ],
)
PASSWORD_INPUT = LocatorChain(
    "password_input",
    [
        ("label", lambda p: p.get_by_label(text_pattern(r"^password$"))),
        ("type", lambda p: p.locator('input[type="password"]')),
    ],
)
SIGN_IN_BUTTON = LocatorChain(
    "sign_in_button",
    [
        ("role", lambda p: p.get_by_role("button", name=text_pattern(r"sign in"))),
        ("submit", lambda p: p.locator('button[type="submit"]')),
    ],
)
REMEMBER_ME = LocatorChain(
    "remember_me",
    [
        ("label", lambda p: p.get_by_label(text_pattern(r"remember me"))),
        ("role", lambda p: p.get_by_role("checkbox", name=text_pattern(r"remember me"))),
    ],
)
FORGOT_PASSWORD_LINK = LocatorChain(
    "forgot_password_link",
    [("role", lambda p: p.get_by_role("link", name=text_pattern(r"forgot (your )?password")))],
)
LOGIN_ERROR = LocatorChain(
    "login_error",
    [
        ("alert", lambda p: p.get_by_role("alert")),
        ("credentials_text", lambda p: p.get_by_text(text_pattern(r"credentials do not match|invalid|incorrect"))),
        ("field_error", lambda p: p.locator(".fi-fo-field-wrp-error-message")),
    ],
)


class LoginPage(BasePage):
    """邮箱 + 密码登录。"""

    def open(self) -> None:
        self.goto(LOGIN_PATH)
        logger.info("已打开登录页")

    def fill_email(self, email: str) -> None:
        self.resolve(EMAIL_INPUT).fill(email)

    def fill_password(self, password: str) -> None:
        self.resolve(PASSWORD_INPUT).fill(password)

    def fill_credentials(self, email: str, password: str) -> None:
        self.fill_email(email)
        self.fill_password(password)

    def click_sign_in(self) -> None:
        self.resolve(SIGN_IN_BUTTON).click()

    def login(self, email: str, password: str) -> None:
        self.fill_credentials(email, password)
        self.click_sign_in()

    def wait_for_two_factor_page(self, timeout: float | None = None) -> None:
        self.page.wait_for_url(re.compile(re.escape(TWO_FACTOR_PATH)), timeout=timeout or self.timeout)

    def select_remember_me(self) -> None:
        self.resolve(REMEMBER_ME).check()

    def click_forgot_password(self) -> None:
        self.resolve(FORGOT_PASSWORD_LINK).click()

    def get_email_value(self) -> str:
        return self.resolve(EMAIL_INPUT).input_value()

    def get_password_value(self) -> str:
        return self.resolve(PASSWORD_INPUT).input_value()

    def is_password_masked(self) -> bool:
        return self.resolve(PASSWORD_INPUT).get_attribute("type") == "password"

    def is_remember_me_selected(self) -> bool:
        return self.resolve(REMEMBER_ME).is_checked()

    def error_message_visible(self) -> bool:
        return self.is_visible(LOGIN_ERROR)
