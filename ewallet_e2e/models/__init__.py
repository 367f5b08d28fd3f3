"""模型集合。"""

from .storage_state import StorageState

__all__ = [
    "StorageState",
]
