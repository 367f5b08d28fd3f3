from __future__ import annotations

import re

import pytest
from playwright.sync_api import Page, expect

from ewallet_e2e import config
from ewallet_e2e.exceptions import OtpRejected
from ewallet_e2e.pages import DashboardPage, LoginPage, TwoFactorPage
from ewallet_e2e.services import auth_flow
from ewallet_e2e.services.auth_flow import Credentials


@pytest.mark.e2e
def test_login_form_masks_password(anonymous_page: Page, e2e_base_url: str) -> None:
    login_page = LoginPage(anonymous_page, e2e_base_url)
    login_page.open()

    login_page.fill_credentials("ops@example.com", "not-a-real-password")

    assert login_page.get_email_value() == "ops@example.com"
    assert login_page.get_password_value() == "not-a-real-password"
    assert login_page.is_password_masked()


@pytest.mark.e2e
def test_empty_fields_stay_on_login_page(anonymous_page: Page, e2e_base_url: str) -> None:
    login_page = LoginPage(anonymous_page, e2e_base_url)
    login_page.open()

    login_page.click_sign_in()

    expect(anonymous_page).to_have_url(re.compile(re.escape(config.LOGIN_PATH)))
    assert login_page.get_email_value() == ""


@pytest.mark.e2e
def test_email_without_domain_is_not_submitted(anonymous_page: Page, e2e_base_url: str) -> None:
    """浏览器原生校验拦截缺少 @ 的邮箱，页面不跳转。"""

    login_page = LoginPage(anonymous_page, e2e_base_url)
    login_page.open()

    login_page.login("admin", "password")

    expect(anonymous_page).to_have_url(re.compile(re.escape(config.LOGIN_PATH)))
    assert login_page.get_email_value() == "admin"


@pytest.mark.e2e
def test_remember_me_can_be_selected(anonymous_page: Page, e2e_base_url: str, credentials: Credentials) -> None:
    login_page = LoginPage(anonymous_page, e2e_base_url)
    login_page.open()
    login_page.fill_credentials(credentials.email, credentials.password)

    assert not login_page.is_remember_me_selected()
    login_page.select_remember_me()

    assert login_page.is_remember_me_selected()


@pytest.mark.e2e
def test_forgot_password_opens_reset_request(anonymous_page: Page, e2e_base_url: str) -> None:
    login_page = LoginPage(anonymous_page, e2e_base_url)
    login_page.open()

    login_page.click_forgot_password()

    expect(anonymous_page).to_have_url(re.compile(re.escape(config.PASSWORD_RESET_PATH)))


@pytest.mark.e2e
def test_invalid_password_stays_on_login_page(anonymous_page: Page, e2e_base_url: str, credentials: Credentials) -> None:
    login_page = LoginPage(anonymous_page, e2e_base_url)
    login_page.open()

    login_page.login(credentials.email, "wrong-password-for-e2e")

    expect(anonymous_page).to_have_url(re.compile(re.escape(config.LOGIN_PATH)))
    assert login_page.error_message_visible()


@pytest.mark.e2e
def test_full_login_with_two_factor_reaches_dashboard(
    anonymous_page: Page, e2e_base_url: str, credentials: Credentials
) -> None:
    auth_flow.login(anonymous_page, credentials, base_url=e2e_base_url, timeout=config.TIMEOUT_DEFAULT)

    assert auth_flow.is_landing_url(anonymous_page.url)
    assert DashboardPage(anonymous_page, e2e_base_url).is_loaded()


@pytest.mark.e2e
def test_wrong_code_is_rejected(anonymous_page: Page, e2e_base_url: str, credentials: Credentials) -> None:
    with pytest.raises(OtpRejected):
        auth_flow.login(
            anonymous_page,
            credentials,
            base_url=e2e_base_url,
            timeout=20_000,
            code_factory=lambda secret: "000000",
        )

    assert config.TWO_FACTOR_PATH in anonymous_page.url
    assert TwoFactorPage(anonymous_page, e2e_base_url).error_message()
