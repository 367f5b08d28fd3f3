"""TOTP 验证码生成（RFC 6238，HMAC-SHA1，30 秒步长，6 位）。"""

from __future__ import annotations

import base64
import binascii
import logging
import re
import time
from datetime import datetime
from typing import Callable

import pyotp

from ewallet_e2e.exceptions import InvalidSecret

logger = logging.getLogger(__name__)

TOTP_DIGITS = 6
TOTP_INTERVAL = 30
# 服务端校验允许前后各 1 个步长的时钟漂移，生成端只需保证当前步长正确
TOTP_VALID_WINDOW = 1

BASE32_PATTERN = re.compile(r"^[A-Z2-7]+=*$")


def normalize_secret(secret: str) -> str:
    """去掉空白并统一大写，兼容验证器里按 4 位分组展示的密钥。"""
    return re.sub(r"\s+", "", str(secret or "")).upper()


def _validated_secret(secret: str) -> str:
    """校验密钥并去掉尾部填充，多余或缺失的 = 都按 base32 长度重新补齐。"""
    normalized = normalize_secret(secret)
    if not normalized:
        raise InvalidSecret("密钥为空")
    if not BASE32_PATTERN.fullmatch(normalized):
        raise InvalidSecret("包含非 base32 字符")

    unpadded = normalized.rstrip("=")
    try:
        base64.b32decode(unpadded + "=" * (-len(unpadded) % 8), casefold=False)
    except binascii.Error as exc:
        raise InvalidSecret(f"base32 解码失败: {exc}") from exc
    return unpadded


def _to_timestamp(at_time: float | datetime | None) -> float:
    if at_time is None:
        return time.time()
    if isinstance(at_time, datetime):
        return at_time.timestamp()
    return float(at_time)


def generate(secret: str, at_time: float | datetime | None = None) -> str:
    """生成指定时刻（默认当前）的 6 位验证码。

    Args:
        secret: base32 编码的共享密钥
        at_time: Unix 时间戳或 datetime，缺省为当前时间

    Raises:
        InvalidSecret: 密钥为空或不是合法的 base32

    """
    normalized = _validated_secret(secret)
    totp = pyotp.TOTP(normalized, digits=TOTP_DIGITS, interval=TOTP_INTERVAL)
    return totp.at(int(_to_timestamp(at_time)))


def seconds_remaining(at_time: float | datetime | None = None) -> float:
    """当前步长剩余的有效秒数。"""
    timestamp = _to_timestamp(at_time)
    return TOTP_INTERVAL - (timestamp % TOTP_INTERVAL)


def fresh_code(
    secret: str,
    *,
    min_validity: float = 3.0,
    clock: Callable[[], float] = time.time,
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    """生成至少还能有效 min_validity 秒的验证码。

    同一步长内重复生成只会得到相同的码，临近边界时直接等到下一个步长。
    """
    _validated_secret(secret)
    now = clock()
    remaining = seconds_remaining(now)
    if remaining < min_validity:
        logger.info("当前验证码仅剩 %.1fs 有效，等待下一个步长", remaining)
        sleep(remaining)
        now = clock()
    return generate(secret, now)
