"""
Pytest fixtures for viewkit tests.

구성:
- 설정: default.yaml, 임시 YAML 작성 팩토리
- 뷰: layouts/ + pages/ 임시 트리
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from src.config.loader import Config, load_config

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


@pytest.fixture
def default_config(default_config_path: Path) -> Config:
    """기본 설정 로드."""
    return load_config(default_config_path)


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """dict → 임시 YAML 파일 작성 팩토리."""

    def _write(data: dict[str, Any], name: str = "app.yaml") -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f)
        return path

    return _write


@pytest.fixture
def cert_files(tmp_path: Path) -> tuple[str, str]:
    """모의 인증서/키 파일."""
    cert = tmp_path / "server.crt"
    key = tmp_path / "server.key"
    cert.write_text("fake cert", encoding="utf-8")
    key.write_text("fake key", encoding="utf-8")
    return str(cert), str(key)


# =============================================================================
# Views Fixtures
# =============================================================================

MASTER_LAYOUT = """<html><head><title>{% block title %}master{% endblock %}</title></head>
<body class="master">{% block body %}{% endblock %}</body></html>"""

PLAIN_LAYOUT = """<div class="plain">{% block body %}{% endblock %}</div>"""


@pytest.fixture
def views_root(tmp_path: Path) -> Path:
    """
    테스트용 views/ 트리.

    views/
    ├── layouts/ (master.html, plain.html, notes.txt)
    └── pages/
        ├── home.html
        ├── app/ (index.html, About.html, _partial.html)
        ├── user/profile/ (detail.html)
        └── empty/
    """
    root = tmp_path / "views"
    layouts = root / "layouts"
    pages = root / "pages"
    (pages / "app").mkdir(parents=True)
    (pages / "user" / "profile").mkdir(parents=True)
    (pages / "empty").mkdir()
    layouts.mkdir()

    (layouts / "master.html").write_text(MASTER_LAYOUT, encoding="utf-8")
    (layouts / "plain.html").write_text(PLAIN_LAYOUT, encoding="utf-8")
    (layouts / "notes.txt").write_text("not a layout", encoding="utf-8")

    (pages / "home.html").write_text(
        "{% extends layout %}{% block body %}home{% endblock %}", encoding="utf-8"
    )
    (pages / "app" / "index.html").write_text(
        "{% extends layout %}{% block title %}{{ title }}{% endblock %}"
        "{% block body %}<h1>{{ title }}</h1>{% include '_partial.html' %}{% endblock %}",
        encoding="utf-8",
    )
    (pages / "app" / "About.html").write_text(
        "{% extends layout %}{% block body %}about{% endblock %}", encoding="utf-8"
    )
    (pages / "app" / "_partial.html").write_text(
        "<p>partial {{ title }}</p>", encoding="utf-8"
    )
    (pages / "user" / "profile" / "detail.html").write_text(
        "{% extends layout %}{% block body %}{{ name }}{% endblock %}", encoding="utf-8"
    )
    return root
