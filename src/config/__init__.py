"""
Config layer: 키/값 설정 소스.

역할:
- YAML 설정 파일 로드 (loader.py)
- 점 표기 키 조회, 환경 프로파일, 환경 변수 오버라이드
"""

from .loader import Config, apply_env_overrides, load_config

__all__ = [
    "Config",
    "load_config",
    "apply_env_overrides",
]
