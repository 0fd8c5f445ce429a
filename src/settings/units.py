"""
단위 문자열 파서: 시간(duration), 크기(bytes), MIME.

- 시간: Go 스타일 (90s, 1m30s, 1.5h, 500ms)
- 크기: 정수 + 단위 (512kb, 1mb, 2GB), 1024 배수
"""

import mimetypes
import re
from datetime import timedelta

# =============================================================================
# Duration
# =============================================================================

# 단위 → 마이크로초
_DURATION_UNITS = {
    "ns": 0.001,
    "us": 1,
    "µs": 1,  # U+00B5 micro sign
    "μs": 1,  # U+03BC greek mu
    "ms": 1_000,
    "s": 1_000_000,
    "m": 60 * 1_000_000,
    "h": 3600 * 1_000_000,
}

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_UNIT = r"(?:ns|us|µs|μs|ms|s|m|h)"
_DURATION_PATTERN = re.compile(rf"^[-+]?(?:{_NUMBER}{_UNIT})+$")
_DURATION_PART = re.compile(rf"({_NUMBER})({_UNIT})")


def is_valid_time_unit(value: str, *units: str) -> bool:
    """값이 주어진 단위 중 하나로 끝나는지 확인."""
    return any(value.endswith(unit) for unit in units)


def parse_duration(value: str) -> timedelta:
    """
    Duration 문자열 파싱.

    예: "90s", "2m", "1m30s", "1.5h", "-300ms", "0"

    Raises:
        ValueError: 형식 오류
    """
    text = value.strip()
    if text in ("0", "+0", "-0"):
        return timedelta(0)
    if not _DURATION_PATTERN.match(text):
        raise ValueError(f"invalid duration {value!r}")

    sign = -1 if text.startswith("-") else 1
    micros = 0.0
    for number, unit in _DURATION_PART.findall(text):
        micros += float(number) * _DURATION_UNITS[unit]
    try:
        return timedelta(microseconds=sign * micros)
    except OverflowError as e:
        raise ValueError(f"invalid duration {value!r}") from e


# =============================================================================
# Byte Size
# =============================================================================

_SIZE_UNITS = {
    "b": 1,
    "kb": 1024,
    "mb": 1024**2,
    "gb": 1024**3,
    "tb": 1024**4,
}

_SIZE_PATTERN = re.compile(r"^(\d+)\s*([a-z]+)$")


def parse_bytes(value: str) -> int:
    """
    크기 문자열을 바이트 수로 변환.

    예: "1mb" → 1048576, "512KB" → 524288

    Raises:
        ValueError: 빈 값, 단위 누락, 알 수 없는 단위
    """
    text = value.strip().lower()
    if not text:
        raise ValueError("empty size value")

    match = _SIZE_PATTERN.match(text)
    if not match:
        raise ValueError(f"invalid size value {value!r}")

    number, unit = match.groups()
    if unit not in _SIZE_UNITS:
        raise ValueError(f"unknown size unit {unit!r} in {value!r}")
    return int(number) * _SIZE_UNITS[unit]


# =============================================================================
# MIME
# =============================================================================


def mime_type_by_extension(filename: str) -> str:
    """파일 확장자로 MIME 타입 추정. 모르면 빈 문자열."""
    mime_type, _ = mimetypes.guess_type(filename)
    return mime_type or ""
