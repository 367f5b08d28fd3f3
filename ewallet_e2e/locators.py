"""有序候选定位链：依次尝试多个定位方式，首个命中者胜出。"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable

from playwright.sync_api import Locator, Page

from ewallet_e2e.exceptions import LocatorNotFound

logger = logging.getLogger(__name__)

LocatorFactory = Callable[[Page], Locator]

DEFAULT_POLL_MS = 250


@dataclass(frozen=True)
class Candidate:
    """单个候选定位方式。"""

    label: str
    factory: LocatorFactory


class LocatorChain:
    """一个逻辑 UI 目标及其按优先级排列的候选定位方式。"""

    def __init__(self, name: str, candidates: Iterable[tuple[str, LocatorFactory]]) -> None:
        self.name = name
        self.candidates = [Candidate(label, factory) for label, factory in candidates]
        if not self.candidates:
            raise ValueError(f"定位链 {name} 至少需要一个候选")

    def __repr__(self) -> str:
        return f"LocatorChain({self.name!r}, {[c.label for c in self.candidates]})"

    @property
    def labels(self) -> list[str]:
        return [candidate.label for candidate in self.candidates]

    def first_match(self, page: Page, *, require_visible: bool = True) -> Locator | None:
        """单轮扫描所有候选，返回首个命中的定位器。"""
        for index, candidate in enumerate(self.candidates):
            locator = candidate.factory(page).first
            if locator.count() == 0:
                continue
            if require_visible and not locator.is_visible():
                continue
            if index > 0:
                logger.debug("定位链 %s 回退命中: %s", self.name, candidate.label)
            return locator
        return None

    def resolve(
        self,
        page: Page,
        *,
        timeout_ms: float,
        require_visible: bool = True,
        poll_ms: float = DEFAULT_POLL_MS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] | None = None,
    ) -> Locator:
        """在超时前轮询定位链。

        Raises:
            LocatorNotFound: 所有候选在超时前均未命中

        """
        wait = sleep or page.wait_for_timeout
        deadline = clock() + timeout_ms / 1000
        while True:
            locator = self.first_match(page, require_visible=require_visible)
            if locator is not None:
                return locator
            if clock() >= deadline:
                raise LocatorNotFound(self.name, self.labels, timeout_ms)
            wait(poll_ms)
