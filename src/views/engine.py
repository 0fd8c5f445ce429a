"""
뷰 템플릿 엔진: layouts × pages 조합 사전 컴파일 (Jinja2).

구조:
views/
├── layouts/        # 래퍼 템플릿, 파일 stem = 레이아웃 이름
│   └── master.html
└── pages/          # 페이지 디렉터리 (재귀, pages/ 자신 포함)
    └── app/
        └── index.html

규칙:
- (레이아웃, 페이지 디렉터리) 쌍마다 하나의 TemplateSet 컴파일
- 페이지는 {% extends layout %}로 레이아웃과 조합 (layout = 레이아웃 파일명)
- 디렉터리 키: pages/user/profile → pages_user_profile
- 대소문자 구분: template.case_sensitive (기본 false)
- HTML 자동 이스케이프는 확장자와 무관하게 항상 켠다
- reload: 레지스트리 전체 재구성, 디렉터리별 실패는 로그 후 하나의 ViewError로 집계
- 동시성 보호 없음: reload와 조회가 겹치지 않도록 호출자가 보장
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import DictLoader, Environment, Template, TemplateError

from src.config.loader import Config
from src.domain.constants import DEFAULT_TEMPLATE_EXT, VIEWS_LAYOUTS_DIR, VIEWS_PAGES_DIR
from src.domain.errors import ErrorCodes, ViewError

logger = logging.getLogger(__name__)

# 모든 TemplateSet에 등록되는 함수 (global + filter)
TEMPLATE_FUNCS: dict[str, Callable[..., Any]] = {}


def add_template_func(funcs: Mapping[str, Callable[..., Any]]) -> None:
    """
    템플릿 함수 등록.

    등록 이후에 컴파일되는 TemplateSet부터 적용된다 (필요하면 reload).
    """
    for name, func in funcs.items():
        TEMPLATE_FUNCS[name] = func


# =============================================================================
# Data Classes
# =============================================================================

class TemplateSet:
    """(레이아웃, 페이지 디렉터리) 하나에 대한 컴파일된 템플릿 묶음."""

    def __init__(
        self,
        name: str,
        environment: Environment,
        templates: dict[str, Template],
    ) -> None:
        self.name = name
        self.environment = environment
        self._templates = templates
        self._templates_lower = {k.lower(): v for k, v in templates.items()}

    def lookup(self, name: str, case_sensitive: bool = True) -> Template | None:
        """템플릿 파일명으로 조회. 없으면 None."""
        if case_sensitive:
            return self._templates.get(name)
        return self._templates_lower.get(name.lower())

    def names(self) -> list[str]:
        return sorted(self._templates)


@dataclass
class Templates:
    """레이아웃별 TemplateSet 레지스트리 (디렉터리 키 → TemplateSet)."""

    template: dict[str, TemplateSet] = field(default_factory=dict)
    template_lower: dict[str, TemplateSet] = field(default_factory=dict)

    def add(self, dir_key: str, template_set: TemplateSet) -> None:
        self.template[dir_key] = template_set
        self.template_lower[dir_key.lower()] = template_set


# =============================================================================
# Engine Interface
# =============================================================================

class TemplateEngineBase(ABC):
    """교체 가능한 뷰 엔진 인터페이스."""

    @abstractmethod
    def init(self, app_config: Config, views_base_dir: Path) -> None:
        """설정과 뷰 루트 경로로 초기화."""

    @abstractmethod
    def load(self) -> None:
        """레이아웃/페이지 로드 및 컴파일."""

    @abstractmethod
    def reload(self) -> None:
        """레지스트리를 비우고 다시 로드."""

    @abstractmethod
    def get(self, layout: str, path: str, name: str) -> Template | None:
        """레이아웃, 디렉터리 경로, 템플릿 이름으로 조회."""


# =============================================================================
# Template Engine
# =============================================================================

class TemplateEngine(TemplateEngineBase):
    """
    기본 뷰 엔진 (Jinja2).

    Usage:
        engine = TemplateEngine()
        engine.init(config, Path("views"))
        engine.load()
        tmpl = engine.get("master", "pages/app", "index.html")
        html = tmpl.render(title="Home")
    """

    def __init__(self) -> None:
        self.app_config: Config | None = None
        self.base_dir: Path | None = None
        self.layouts: dict[str, Templates] = {}

    def init(self, app_config: Config, views_base_dir: Path) -> None:
        self.app_config = app_config
        self.base_dir = Path(views_base_dir)
        self.layouts = {}

    # =========================================================================
    # Load / Reload
    # =========================================================================

    def load(self) -> None:
        """
        뷰 레이아웃과 페이지 로드.

        Raises:
            ViewError: VIEWS_DIR_NOT_FOUND, LAYOUTS_DIR_NOT_FOUND,
                PAGES_DIR_NOT_FOUND, TEMPLATE_PROCESSING_FAILED
        """
        if self.base_dir is None or not self.base_dir.exists():
            raise ViewError(
                ErrorCodes.VIEWS_DIR_NOT_FOUND,
                f"views base dir is not exists: {self.base_dir}",
                path=str(self.base_dir),
            )

        layouts_dir = self.base_dir / VIEWS_LAYOUTS_DIR
        if not layouts_dir.exists():
            raise ViewError(
                ErrorCodes.LAYOUTS_DIR_NOT_FOUND,
                f"layouts base dir is not exists: {layouts_dir}",
                path=str(layouts_dir),
            )

        pages_dir = self.base_dir / VIEWS_PAGES_DIR
        if not pages_dir.exists():
            raise ViewError(
                ErrorCodes.PAGES_DIR_NOT_FOUND,
                f"pages base dir is not exists: {pages_dir}",
                path=str(pages_dir),
            )

        ext = self._config.string_default("template.ext", DEFAULT_TEMPLATE_EXT)
        layouts = _glob(layouts_dir, ext)
        page_dirs = [pages_dir, *sorted(p for p in pages_dir.rglob("*") if p.is_dir())]

        self._process_templates(layouts, page_dirs, ext)

    def reload(self) -> None:
        self.layouts = {}
        self.load()

    # =========================================================================
    # Lookup
    # =========================================================================

    def get(self, layout: str, path: str, name: str) -> Template | None:
        """
        템플릿 조회.

        Args:
            layout: 레이아웃 이름 (예: "master")
            path: 페이지 디렉터리 경로 (예: "pages/app" 또는 절대 경로)
            name: 템플릿 파일명 (예: "index.html")

        Returns:
            Jinja2 Template 또는 None
        """
        bundle = self.layouts.get(layout)
        if bundle is None:
            return None

        key = self.dir_key(path)
        if self.case_sensitive:
            template_set = bundle.template.get(key)
            return template_set.lookup(name) if template_set else None

        template_set = bundle.template_lower.get(key.lower())
        return template_set.lookup(name, case_sensitive=False) if template_set else None

    def dir_key(self, path: str | Path) -> str:
        """
        디렉터리 경로 → 고유 키.

        views/pages/user/profile → pages_user_profile
        """
        text = str(path)
        if self.base_dir is not None:
            base = str(self.base_dir)
            if text.startswith(base):
                text = text[len(base):]

        text = text.replace("\\", "/")
        idx = text.find(VIEWS_PAGES_DIR)
        if idx > 0:
            text = text[idx:]
        return text.strip("/").replace("/", "_")

    @property
    def case_sensitive(self) -> bool:
        return self._config.bool_default("template.case_sensitive", False)

    def layout_names(self) -> list[str]:
        return sorted(self.layouts)

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    @property
    def _config(self) -> Config:
        if self.app_config is None:
            self.app_config = Config()
        return self.app_config

    def _process_templates(
        self,
        layouts: dict[str, Path],
        page_dirs: list[Path],
        ext: str,
    ) -> None:
        """레이아웃 × 페이지 디렉터리 처리. 실패는 집계 후 마지막에 한 번 보고."""
        env_options = self._environment_options()
        registry: dict[str, Templates] = {}
        failed: list[str] = []

        for layout, layout_path in layouts.items():
            bundle = Templates()

            for page_dir in page_dirs:
                files = sorted(p for p in page_dir.glob(f"*{ext}") if p.is_file())
                if not files:
                    continue

                key = self.dir_key(page_dir)
                try:
                    template_set = _compile_set(key, files, layout_path, env_options)
                except (OSError, UnicodeError, TemplateError) as e:
                    logger.error(
                        f"Template processing failed (layout={layout}, dir={key}): {e}"
                    )
                    failed.append(f"{layout}:{key}")
                    continue

                bundle.add(key, template_set)

            registry[layout] = bundle

        self.layouts = registry
        logger.info(
            f"Views loaded: {len(registry)} layout(s), {len(page_dirs)} page dir(s)"
        )

        if failed:
            raise ViewError(
                ErrorCodes.TEMPLATE_PROCESSING_FAILED,
                "error processing templates, check the log",
                failed=failed,
            )

    def _environment_options(self) -> dict[str, Any]:
        """template.delimiters → Jinja2 변수 구분자 옵션."""
        if not self._config.is_exists("template.delimiters"):
            return {}

        value = self._config.string_default("template.delimiters", "{{.}}")
        delimiters = value.split(".")
        if len(delimiters) != 2 or not all(delimiters):
            logger.error(f"config 'template.delimiters' value is not valid: {value!r}")
            return {}

        return {
            "variable_start_string": delimiters[0],
            "variable_end_string": delimiters[1],
        }


def _glob(directory: Path, ext: str) -> dict[str, Path]:
    """확장자가 일치하는 파일: stem → 경로."""
    return {p.stem: p for p in sorted(directory.glob(f"*{ext}")) if p.is_file()}


def _compile_set(
    name: str,
    files: list[Path],
    layout_path: Path,
    env_options: dict[str, Any],
) -> TemplateSet:
    """페이지 파일 + 레이아웃 파일을 하나의 Environment로 컴파일."""
    sources = {f.name: f.read_text(encoding="utf-8") for f in files}
    # 같은 파일명이면 레이아웃이 우선
    sources[layout_path.name] = layout_path.read_text(encoding="utf-8")

    env = Environment(
        loader=DictLoader(sources),
        autoescape=True,
        **env_options,
    )
    env.globals.update(TEMPLATE_FUNCS)
    env.filters.update(TEMPLATE_FUNCS)
    env.globals["layout"] = layout_path.name

    templates = {template_name: env.get_template(template_name) for template_name in sources}
    return TemplateSet(name, env, templates)
