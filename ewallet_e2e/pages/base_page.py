"""页面对象基类。"""

from __future__ import annotations

import logging
import re

from playwright.sync_api import Locator, Page

from ewallet_e2e.config import BASE_URL, TIMEOUT_DEFAULT
from ewallet_e2e.locators import LocatorChain

logger = logging.getLogger(__name__)

# 单个元素的等待上限，整体用例超时由 TIMEOUT_DEFAULT 控制
ELEMENT_TIMEOUT_MS = 15_000


def text_pattern(text: str) -> re.Pattern[str]:
    """按文本做不区分大小写的模糊匹配。"""
    return re.compile(text, re.IGNORECASE)


class BasePage:
    """封装导航、等待与定位链解析。"""

    def __init__(self, page: Page, base_url: str = BASE_URL, timeout: int = TIMEOUT_DEFAULT) -> None:
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def goto(self, path: str) -> None:
        self.page.goto(self.url_for(path))

    def wait_for_page_load(self) -> None:
        self.page.wait_for_load_state("networkidle")

    def resolve(self, chain: LocatorChain, *, timeout_ms: float = ELEMENT_TIMEOUT_MS, require_visible: bool = True) -> Locator:
        return chain.resolve(self.page, timeout_ms=timeout_ms, require_visible=require_visible)

    def is_visible(self, chain: LocatorChain) -> bool:
        """单轮判断定位链是否可见，未命中返回 False。"""
        return chain.first_match(self.page) is not None

    def text_of(self, chain: LocatorChain) -> str:
        locator = chain.first_match(self.page)
        if locator is None:
            return ""
        return (locator.text_content() or "").strip()
