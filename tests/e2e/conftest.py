"""E2E 测试 fixture。

所有用例共享同一份登录态：会话开始时完整登录一次（带 2FA），
之后每个用例用缓存的 storage state 新建浏览器上下文。
"""

from __future__ import annotations

import time
from typing import Iterator

import httpx
import pytest
from playwright.sync_api import Browser, Error, Page, sync_playwright

from ewallet_e2e import config
from ewallet_e2e.services.auth_flow import Credentials, bootstrap_session, new_authenticated_context
from ewallet_e2e.services.session_cache import SessionCache, ensure_empty_state


def _wait_server_ready(base_url: str, timeout: float = 15.0) -> None:
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            response = httpx.get(f"{base_url}{config.LOGIN_PATH}", timeout=5.0, follow_redirects=True)
            if response.status_code < 500:
                return
        except httpx.HTTPError:
            pass
        time.sleep(0.5)
    raise RuntimeError(f"Server not reachable: {base_url}")


@pytest.fixture(scope="session")
def e2e_base_url() -> str:
    missing = config.missing_credentials()
    if missing:
        pytest.skip(f"缺少环境变量 {', '.join(missing)}，跳过 E2E")

    try:
        _wait_server_ready(config.BASE_URL)
    except RuntimeError as exc:
        pytest.skip(f"被测后台不可访问，跳过 E2E: {exc}")
    return config.BASE_URL


@pytest.fixture(scope="session")
def credentials() -> Credentials:
    return Credentials.from_config()


@pytest.fixture(scope="session")
def browser(e2e_base_url: str) -> Iterator[Browser]:
    with sync_playwright() as p:
        try:
            browser = p.chromium.launch(headless=config.HEADLESS)
        except Error as exc:
            pytest.skip(f"Chromium not installed for Playwright: {exc}")

        yield browser
        browser.close()


@pytest.fixture(scope="session")
def auth_cache(browser: Browser, credentials: Credentials, e2e_base_url: str) -> SessionCache:
    """会话级登录一次，缓存新鲜时直接复用。"""

    cache = SessionCache(config.AUTH_STATE_FILE, stale_after_hours=config.AUTH_STALE_AFTER_HOURS)
    bootstrap_session(browser, cache, credentials, base_url=e2e_base_url)
    ensure_empty_state(config.EMPTY_STATE_FILE)
    return cache


@pytest.fixture
def authenticated_page(
    browser: Browser, auth_cache: SessionCache, credentials: Credentials, e2e_base_url: str
) -> Iterator[Page]:
    context = new_authenticated_context(browser, auth_cache, credentials, base_url=e2e_base_url)
    context.set_default_timeout(config.TIMEOUT_DEFAULT)
    page = context.new_page()
    page.goto(f"{e2e_base_url}{config.LANDING_PATH}", wait_until="networkidle")
    yield page
    context.close()


@pytest.fixture
def anonymous_page(browser: Browser, e2e_base_url: str) -> Iterator[Page]:
    """不带任何登录态的页面，用于登录流程用例。"""

    empty_state = ensure_empty_state(config.EMPTY_STATE_FILE)
    context = browser.new_context(storage_state=str(empty_state), viewport=config.VIEWPORT)
    context.set_default_timeout(config.TIMEOUT_DEFAULT)
    page = context.new_page()
    yield page
    context.close()
