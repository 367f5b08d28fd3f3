"""登录态快照缓存：一次完整登录写入，后续测试直接复用。"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ewallet_e2e.config import AUTH_STALE_AFTER_HOURS
from ewallet_e2e.exceptions import WriteError
from ewallet_e2e.models import StorageState

logger = logging.getLogger(__name__)

EMPTY_STATE: dict[str, Any] = {"cookies": [], "origins": []}


@dataclass(frozen=True)
class CacheFreshness:
    """快照新鲜度检查结果，仅作提示，不会触发自动删除或刷新。"""

    exists: bool
    stale_after_hours: int
    is_stale: bool
    age_hours: float | None = None


def _write_json_atomic(path: Path, data: dict[str, Any]) -> None:
    """先写同目录临时文件再整体替换，读方不会看到半个快照。"""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class SessionCache:
    """单个缓存槽位：固定路径上至多一个快照文件。"""

    def __init__(self, path: Path | str, stale_after_hours: int = AUTH_STALE_AFTER_HOURS) -> None:
        self.path = Path(path)
        self.stale_after_hours = stale_after_hours

    def __repr__(self) -> str:
        return f"SessionCache(path={str(self.path)!r}, stale_after_hours={self.stale_after_hours})"

    def save(self, state: StorageState | dict[str, Any]) -> Path:
        """整体覆盖写入快照，父目录不存在时自动创建。

        Raises:
            WriteError: 文件系统拒绝写入

        """
        snapshot = state if isinstance(state, StorageState) else StorageState.from_dict(state)
        try:
            _write_json_atomic(self.path, snapshot.to_dict())
        except OSError as exc:
            raise WriteError(self.path, exc.strerror or str(exc)) from exc

        logger.info(
            "登录态已保存: %s（cookies=%d, localStorage=%d）",
            self.path,
            snapshot.cookie_count,
            snapshot.local_storage_count,
        )
        return self.path

    def save_from_context(self, context: Any) -> Path:
        """读取浏览器上下文的 storage state 并写入缓存。

        只能在确认已进入登录后落地页之后调用。
        """
        return self.save(StorageState.from_dict(context.storage_state()))

    def load(self) -> StorageState | None:
        """读取快照；文件不存在时返回 None，调用方应回退到完整登录。"""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("登录态缓存未命中: %s", self.path)
            return None
        return StorageState.from_dict(json.loads(raw))

    def check_freshness(self, now: datetime | None = None) -> CacheFreshness:
        """根据文件修改时间计算快照年龄。"""
        try:
            mtime = self.path.stat().st_mtime
        except FileNotFoundError:
            return CacheFreshness(exists=False, stale_after_hours=self.stale_after_hours, is_stale=False)

        current = now or datetime.now(timezone.utc)
        age_hours = max(current.timestamp() - mtime, 0.0) / 3600
        return CacheFreshness(
            exists=True,
            stale_after_hours=self.stale_after_hours,
            is_stale=age_hours > self.stale_after_hours,
            age_hours=age_hours,
        )

    def is_usable(self, now: datetime | None = None) -> bool:
        """快照存在且未过期时可直接复用。"""
        freshness = self.check_freshness(now)
        if freshness.is_stale:
            logger.warning(
                "登录态已超过 %d 小时（%.1fh），将重新登录",
                freshness.stale_after_hours,
                freshness.age_hours or 0.0,
            )
        return freshness.exists and not freshness.is_stale

    def invalidate(self) -> bool:
        """删除快照；目录因此变空时一并删除，目录里有其他文件则保留。"""
        removed = False
        try:
            self.path.unlink()
            removed = True
            logger.info("已删除登录态: %s", self.path)
        except FileNotFoundError:
            pass

        directory = self.path.parent
        try:
            if directory.is_dir() and not any(directory.iterdir()):
                directory.rmdir()
                logger.info("已删除空的登录态目录: %s", directory)
        except OSError as exc:
            # 并发写入者可能刚刚放入新文件
            logger.debug("保留登录态目录 %s: %s", directory, exc)
        return removed


def ensure_empty_state(path: Path | str) -> Path:
    """写入空登录态文件，供未登录场景的浏览器上下文使用。"""
    target = Path(path)
    if target.exists():
        return target
    try:
        _write_json_atomic(target, EMPTY_STATE)
    except OSError as exc:
        raise WriteError(target, exc.strerror or str(exc)) from exc
    return target
