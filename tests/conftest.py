"""测试公共 fixture。"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv


ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# 本地运行时加载项目 .env，保证 E2E 能读到 EMAIL/PASSWORD/TOTP_SECRET。
load_dotenv(ROOT_DIR / ".env")

from ewallet_e2e.services.session_cache import SessionCache  # noqa: E402

SAMPLE_SECRET = "MGNA5HIZKTHIFEYZ"


@pytest.fixture
def totp_secret() -> str:
    return SAMPLE_SECRET


@pytest.fixture
def sample_state() -> dict:
    """与 Playwright context.storage_state() 结构一致的示例快照。"""

    return {
        "cookies": [
            {
                "name": "ewallet_session",
                "value": "abc123",
                "domain": "ewallet.walletwhisper.io",
                "path": "/",
                "expires": 1893456000,
                "httpOnly": True,
                "secure": True,
                "sameSite": "Lax",
            },
            {
                "name": "XSRF-TOKEN",
                "value": "token-value",
                "domain": "ewallet.walletwhisper.io",
                "path": "/",
                "expires": -1,
                "httpOnly": False,
                "secure": True,
                "sameSite": "Lax",
            },
        ],
        "origins": [
            {
                "origin": "https://ewallet.walletwhisper.io",
                "localStorage": [{"name": "theme", "value": "dark"}],
            }
        ],
    }


@pytest.fixture
def session_cache(tmp_path: Path) -> SessionCache:
    """指向临时目录的缓存槽位，目录本身尚未创建。"""

    return SessionCache(tmp_path / "playwright" / ".auth" / "user.json")
