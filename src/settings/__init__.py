"""
Settings layer: 설정 해석/검증.

역할:
- 설정 소스 → Settings (settings.py)
- 시간/크기 단위 파서 (units.py)
"""

from .settings import Settings, check_ssl_config
from .units import (
    is_valid_time_unit,
    mime_type_by_extension,
    parse_bytes,
    parse_duration,
)

__all__ = [
    # settings
    "Settings",
    "check_ssl_config",
    # units
    "is_valid_time_unit",
    "parse_duration",
    "parse_bytes",
    "mime_type_by_extension",
]
