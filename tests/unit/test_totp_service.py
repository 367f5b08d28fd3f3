from __future__ import annotations

import re
from datetime import datetime, timezone

import pytest

from ewallet_e2e.exceptions import InvalidSecret
from ewallet_e2e.services import totp_service

# RFC 6238 附录 B 的 SHA-1 种子 "12345678901234567890" 的 base32 形式
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
CODE_PATTERN = re.compile(r"^[0-9]{6}$")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("timestamp", "expected"),
    [
        (59, "287082"),
        (1111111109, "081804"),
        (1234567890, "005924"),
        (2000000000, "279037"),
    ],
)
def test_generate_matches_rfc6238_vectors(timestamp: int, expected: str) -> None:
    """8 位参考值截取后 6 位即为 6 位验证码。"""

    assert totp_service.generate(RFC_SECRET, timestamp) == expected


@pytest.mark.unit
def test_generate_returns_six_digits_for_consecutive_steps(totp_secret: str) -> None:
    t0 = 1_760_000_000
    c0 = totp_service.generate(totp_secret, t0)
    c1 = totp_service.generate(totp_secret, t0 + 30)

    assert CODE_PATTERN.fullmatch(c0)
    assert CODE_PATTERN.fullmatch(c1)


@pytest.mark.unit
def test_generate_is_deterministic_within_one_step(totp_secret: str) -> None:
    step_start = 1_760_000_010 - (1_760_000_010 % 30)

    codes = {totp_service.generate(totp_secret, step_start + offset) for offset in (0, 1, 15, 29)}

    assert len(codes) == 1


@pytest.mark.unit
def test_generate_changes_across_steps(totp_secret: str) -> None:
    """不同步长的验证码不能是常量。"""

    codes = {totp_service.generate(totp_secret, 1_760_000_000 + step * 30) for step in range(10)}

    assert len(codes) > 1


@pytest.mark.unit
def test_generate_accepts_datetime() -> None:
    moment = datetime.fromtimestamp(59, tz=timezone.utc)

    assert totp_service.generate(RFC_SECRET, moment) == "287082"


@pytest.mark.unit
def test_generate_defaults_to_current_time(totp_secret: str) -> None:
    assert CODE_PATTERN.fullmatch(totp_service.generate(totp_secret))


@pytest.mark.unit
def test_secret_is_normalized_before_use(totp_secret: str) -> None:
    """验证器里常见的分组小写写法与原始密钥等价。"""

    grouped = " mgna 5hiz ktHI feyz "

    assert totp_service.normalize_secret(grouped) == totp_secret
    assert totp_service.generate(grouped, 1_760_000_000) == totp_service.generate(totp_secret, 1_760_000_000)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("padded", "bare"),
    [
        ("MGNA5HIZKTHIFEYZ=", "MGNA5HIZKTHIFEYZ"),
        ("MGNA5HIZKTHIFEYZ========", "MGNA5HIZKTHIFEYZ"),
        ("AAAAAAAA=", "AAAAAAAA"),
        ("MGNA5HIZKTHIFEY=", "MGNA5HIZKTHIFEY"),
    ],
)
def test_generate_tolerates_trailing_padding(padded: str, bare: str) -> None:
    """尾部 = 的数量不影响结果，与不带填充的密钥生成同一个码。"""

    code = totp_service.generate(padded, 59)

    assert CODE_PATTERN.fullmatch(code)
    assert code == totp_service.generate(bare, 59)


@pytest.mark.unit
def test_padded_rfc_secret_keeps_reference_code() -> None:
    assert totp_service.generate(f"{RFC_SECRET}========", 59) == "287082"


@pytest.mark.unit
@pytest.mark.parametrize("secret", ["", "   ", "MGNA-5HIZ", "mgna5hiz0", "ABC1", "MGNA5HIZ!", "A=======", "AAA", "===="])
def test_generate_rejects_invalid_secret(secret: str) -> None:
    with pytest.raises(InvalidSecret):
        totp_service.generate(secret, 59)


@pytest.mark.unit
def test_seconds_remaining() -> None:
    assert totp_service.seconds_remaining(59) == 1
    assert totp_service.seconds_remaining(60) == 30
    assert totp_service.seconds_remaining(75.5) == 14.5


@pytest.mark.unit
def test_fresh_code_waits_for_next_step_near_boundary() -> None:
    state = {"now": 58.5}
    slept: list[float] = []

    def fake_sleep(seconds: float) -> None:
        slept.append(seconds)
        state["now"] += seconds

    code = totp_service.fresh_code(RFC_SECRET, min_validity=3.0, clock=lambda: state["now"], sleep=fake_sleep)

    assert slept == [1.5]
    assert code == totp_service.generate(RFC_SECRET, 60)


@pytest.mark.unit
def test_fresh_code_does_not_wait_with_enough_validity() -> None:
    slept: list[float] = []

    code = totp_service.fresh_code(RFC_SECRET, min_validity=3.0, clock=lambda: 40.0, sleep=slept.append)

    assert slept == []
    assert code == totp_service.generate(RFC_SECRET, 40)


@pytest.mark.unit
def test_fresh_code_validates_secret_before_waiting() -> None:
    slept: list[float] = []

    with pytest.raises(InvalidSecret):
        totp_service.fresh_code("", clock=lambda: 59.9, sleep=slept.append)

    assert slept == []
