"""测试套件配置（通过 .env 覆盖）。"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# 优先加载项目根目录下的 .env，config.env 仅作为模板兜底，不覆盖已有变量
BASE_DIR = Path(__file__).resolve().parents[1]
load_dotenv(BASE_DIR / ".env")
load_dotenv(BASE_DIR / "config.env")

DEFAULT_BASE_URL = "https://ewallet.walletwhisper.io"
DEFAULT_TIMEOUT_MS = 60_000
PLACEHOLDER_PREFIX = "your-"


def _to_bool(value: str | None, default: bool) -> bool:
    """把环境变量值转换为布尔值。"""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "on", "yes"}


def _to_int(value: str | None, default: int, *, minimum: int = 1) -> int:
    """把环境变量值转换为整数并保证下限。"""
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= minimum else default


EMAIL = os.getenv("EMAIL", "").strip()
PASSWORD = os.getenv("PASSWORD", "")
TOTP_SECRET = os.getenv("TOTP_SECRET", "").strip()

BASE_URL = (os.getenv("BASE_URL", "").strip() or DEFAULT_BASE_URL).rstrip("/")
TIMEOUT_DEFAULT = _to_int(os.getenv("TIMEOUT_DEFAULT"), DEFAULT_TIMEOUT_MS)
HEADLESS = _to_bool(os.getenv("HEADLESS"), default=True)

AUTH_DIR = Path(os.getenv("AUTH_DIR", "").strip() or BASE_DIR / "playwright" / ".auth")
AUTH_STATE_FILE = AUTH_DIR / "user.json"
EMPTY_STATE_FILE = AUTH_DIR / "empty.json"
AUTH_STALE_AFTER_HOURS = 24

VIEWPORT = {"width": 1440, "height": 900}

LOGIN_PATH = "/admin/login"
TWO_FACTOR_PATH = "/admin/2fa"
LANDING_PATH = "/admin"
LOGOUT_PATH = "/admin/logout"
PASSWORD_RESET_PATH = "/admin/password-reset/request"


def is_configured(value: str) -> bool:
    # config.env 模板里的占位值视为未配置
    return bool(value) and not value.startswith(PLACEHOLDER_PREFIX)


def missing_credentials() -> list[str]:
    """返回未配置的登录凭据变量名。"""
    values = {"EMAIL": EMAIL, "PASSWORD": PASSWORD, "TOTP_SECRET": TOTP_SECRET}
    return [name for name, value in values.items() if not is_configured(value)]
