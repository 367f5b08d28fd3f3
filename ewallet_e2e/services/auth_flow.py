"""登录 + 二次验证编排，并把登录态写入缓存供后续测试复用。

冷启动：邮箱密码 → 二次验证页 → TOTP → 落地页确认 → 保存登录态。
热启动：直接用缓存的登录态创建浏览器上下文，跳过整个登录流程。
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable
from urllib.parse import urlparse

from playwright.sync_api import Browser, BrowserContext, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ewallet_e2e import config
from ewallet_e2e.exceptions import OtpRejected
from ewallet_e2e.pages.dashboard_page import DashboardPage
from ewallet_e2e.pages.login_page import LoginPage
from ewallet_e2e.pages.two_factor_page import TwoFactorPage
from ewallet_e2e.services import totp_service
from ewallet_e2e.services.session_cache import SessionCache

logger = logging.getLogger(__name__)

LANDING_PATHS = {config.LANDING_PATH, f"{config.LANDING_PATH}/dashboard"}
LANDING_POLL_MS = 250


@dataclass(frozen=True)
class Credentials:
    """后台账号凭据。"""

    email: str
    password: str
    totp_secret: str

    @classmethod
    def from_config(cls) -> Credentials:
        return cls(email=config.EMAIL, password=config.PASSWORD, totp_secret=config.TOTP_SECRET)

    def missing(self) -> list[str]:
        values = {"EMAIL": self.email, "PASSWORD": self.password, "TOTP_SECRET": self.totp_secret}
        return [name for name, value in values.items() if not config.is_configured(value)]

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='***', totp_secret='***')"


def is_landing_url(url: str) -> bool:
    """登录完成后的落地页：/admin 或 /admin/dashboard。"""
    path = urlparse(url).path.rstrip("/") or "/"
    return path in LANDING_PATHS


def wait_for_landing(
    page: Page,
    *,
    base_url: str = config.BASE_URL,
    timeout: float = config.TIMEOUT_DEFAULT,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """等待进入落地页；二次验证页出现错误提示时立即判定验证码被拒。

    Raises:
        OtpRejected: 二次验证页显示了错误提示
        playwright.sync_api.TimeoutError: 超时仍未进入落地页且没有错误提示

    """
    two_factor = TwoFactorPage(page, base_url, int(timeout))
    deadline = clock() + timeout / 1000
    while not is_landing_url(page.url):
        if config.TWO_FACTOR_PATH in page.url:
            message = two_factor.error_message()
            if message:
                raise OtpRejected(message)
        if clock() >= deadline:
            raise PlaywrightTimeoutError(f"Timeout {timeout:.0f}ms exceeded waiting for landing page, current url: {page.url}")
        page.wait_for_timeout(LANDING_POLL_MS)

    DashboardPage(page, base_url, int(timeout)).verify_loaded()


def login(
    page: Page,
    credentials: Credentials,
    *,
    base_url: str = config.BASE_URL,
    timeout: int = config.TIMEOUT_DEFAULT,
    code_factory: Callable[[str], str] = totp_service.fresh_code,
) -> Page:
    """完整登录（含二次验证），返回已进入落地页的 page。"""
    logger.info("开始登录: %s", credentials.email)
    login_page = LoginPage(page, base_url, timeout)
    login_page.open()
    login_page.login(credentials.email, credentials.password)
    login_page.wait_for_two_factor_page()

    code = code_factory(credentials.totp_secret)
    TwoFactorPage(page, base_url, timeout).submit_code(code)
    logger.info("验证码已提交，等待落地页")

    wait_for_landing(page, base_url=base_url, timeout=timeout)
    logger.info("登录成功: %s", page.url)
    return page


def bootstrap_session(
    browser: Browser,
    cache: SessionCache,
    credentials: Credentials,
    *,
    base_url: str = config.BASE_URL,
    timeout: int = config.TIMEOUT_DEFAULT,
    force: bool = False,
    context_args: dict[str, Any] | None = None,
) -> Path:
    """确保缓存里有可用登录态，返回快照路径。

    缓存可用且未强制刷新时不会打开浏览器页面；否则执行完整登录，
    并且只在确认进入落地页之后才写入缓存。
    """
    if not force and cache.is_usable():
        logger.info("复用已缓存的登录态: %s", cache.path)
        return cache.path

    missing = credentials.missing()
    if missing:
        raise ValueError(f"缺少登录凭据: {', '.join(missing)}")

    context = browser.new_context(viewport=config.VIEWPORT, **(context_args or {}))
    try:
        page = context.new_page()
        login(page, credentials, base_url=base_url, timeout=timeout)
        return cache.save_from_context(context)
    finally:
        context.close()


def new_authenticated_context(
    browser: Browser,
    cache: SessionCache,
    credentials: Credentials,
    *,
    base_url: str = config.BASE_URL,
    timeout: int = config.TIMEOUT_DEFAULT,
    **context_args: Any,
) -> BrowserContext:
    """用缓存登录态创建浏览器上下文，缓存缺失或过期时先完整登录一次。"""
    state = cache.load() if cache.is_usable() else None
    if state is None:
        bootstrap_session(browser, cache, credentials, base_url=base_url, timeout=timeout, force=True)
        state = cache.load()
    if state is None:
        raise RuntimeError(f"登录后仍未读取到登录态: {cache.path}")

    context_args.setdefault("viewport", config.VIEWPORT)
    return browser.new_context(storage_state=state.to_dict(), **context_args)
