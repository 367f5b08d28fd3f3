"""导入订单文件的校验与构造工具。"""

from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Any, Iterable

ALLOWED_IMPORT_EXTENSIONS = {".xlsx", ".xls", ".csv"}
DEFAULT_MAX_IMPORT_SIZE_MB = 5

SIZE_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(kb|mb|gb|b)?", re.IGNORECASE)
SIZE_UNITS_MB = {"b": 1 / (1024 * 1024), "kb": 1 / 1024, "mb": 1.0, "gb": 1024.0}

# 后台导入模板的列，同一 order_reference 的多行归为一个订单
ORDER_IMPORT_COLUMNS = [
    "order_reference",
    "customer_name",
    "customer_email",
    "customer_phone",
    "product_name",
    "quantity",
    "unit_price",
    "currency",
]


def validate_import_file_meta(filename: str, size_bytes: int, *, max_size_mb: float = DEFAULT_MAX_IMPORT_SIZE_MB) -> str:
    """校验导入文件扩展名与大小，不合法时返回错误信息。"""

    suffix = Path(str(filename or "")).suffix.lower()
    if suffix not in ALLOWED_IMPORT_EXTENSIONS:
        return "仅支持 Excel（.xlsx/.xls）或 CSV 文件"
    if size_bytes <= 0:
        return "文件内容为空"
    if size_bytes > max_size_mb * 1024 * 1024:
        return f"文件大小不能超过 {max_size_mb:g}MB"
    return ""


def parse_size_mb(text: str) -> float | None:
    """把页面上的大小文本（如 "2.5 MB"）换算为 MB，无法识别时返回 None。"""

    match = SIZE_PATTERN.search(str(text or ""))
    if not match:
        return None
    unit = (match.group(2) or "mb").lower()
    return float(match.group(1)) * SIZE_UNITS_MB[unit]


def is_excel_type(text: str) -> bool:
    lowered = str(text or "").lower()
    return "excel" in lowered or "xlsx" in lowered


def is_csv_type(text: str) -> bool:
    return "csv" in str(text or "").lower()


def write_orders_csv(path: Path, rows: Iterable[dict[str, Any]], columns: list[str] | None = None) -> Path:
    """按导入模板列写出 CSV，缺失的列留空。"""

    header = columns or ORDER_IMPORT_COLUMNS
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=header, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow({key: row.get(key, "") for key in header})
    return path
