"""测试套件异常类型。

缓存未命中不是异常：SessionCache.load() 直接返回 None，由调用方回退到完整登录。
"""

from __future__ import annotations

from pathlib import Path


class EwalletE2EError(Exception):
    """所有自定义异常的基类。"""


class InvalidSecret(EwalletE2EError):
    """TOTP 共享密钥为空或不是合法的 base32 字符串。"""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"TOTP 密钥不合法: {reason}")


class WriteError(EwalletE2EError):
    """登录态快照写入失败（权限不足、磁盘已满等）。

    Attributes:
        path: 目标快照文件路径

    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"登录态写入失败: {path} ({reason})")


class OtpRejected(EwalletE2EError):
    """提交验证码后二次验证页显示了错误提示。"""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"验证码被拒绝: {message or '无错误文本'}")


class LocatorNotFound(EwalletE2EError):
    """定位链中没有任何候选在超时前命中。

    Attributes:
        chain: 定位链名称
        tried: 依次尝试过的候选标签

    """

    def __init__(self, chain: str, tried: list[str], timeout_ms: float) -> None:
        self.chain = chain
        self.tried = list(tried)
        self.timeout_ms = timeout_ms
        super().__init__(f"定位失败: {chain}，已尝试 {', '.join(self.tried) or '无候选'}（{timeout_ms:.0f}ms）")
