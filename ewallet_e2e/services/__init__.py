"""业务服务层。"""

from ewallet_e2e.services import (
    auth_flow,
    session_cache,
    totp_service,
    validators,
)

__all__ = [
    "auth_flow",
    "session_cache",
    "totp_service",
    "validators",
]
