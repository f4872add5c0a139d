"""Build configuration from the environment and YAML files."""

from __future__ import annotations

import datetime
import os
from importlib import resources
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from attrs import define, evolve, fields

from booksite.builder.errors import BuildError, ConfigError

# Locations used when nothing else is configured.
DEFAULT_CONTENT_DIR = Path("data")
DEFAULT_OUTPUT_DIR = Path("docs")
DEFAULT_CSS_FILE = Path("dist") / "styles.css"
DEFAULT_CONFIG_FILE = Path("booksite.yaml")

# Environment variables mapped to configuration keys.
ENV_VARS = {
    "BOOKSITE_CONTENT_DIR": "content_dir",
    "BOOKSITE_OUTPUT_DIR": "output_dir",
    "BOOKSITE_TEMPLATE": "template",
    "BOOKSITE_LIBRARY_TEMPLATE": "library_template",
    "BOOKSITE_CSS": "css_file",
    "BOOKSITE_BUILD_DATE": "build_date",
}

_PATH_KEYS = {
    "content_dir",
    "output_dir",
    "template",
    "library_template",
    "css_file",
}


@define(slots=True)
class BuildConfig:
    """Settings of one site build.

    Attributes:
        content_dir: Directory holding one sub-directory per book.
        output_dir: Directory receiving the generated site.
        template: Page template; the packaged one is used when unset.
        library_template: Landing page template; packaged one when unset.
        css_file: Stylesheet inlined into every page. When unset,
            ``dist/styles.css`` is used if it exists.
        build_date: Date shown in page footers; today when unset.
    """

    content_dir: Path = DEFAULT_CONTENT_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR
    template: Path | None = None
    library_template: Path | None = None
    css_file: Path | None = None
    build_date: str | None = None

    def page_template(self) -> str:
        """Return the text of the chapter page template."""
        return _read_template(self.template, "book.html")

    def index_template(self) -> str:
        """Return the text of the landing page template."""
        return _read_template(self.library_template, "library.html")

    def css(self) -> str:
        """Return the stylesheet inlined into generated pages.

        Throws:
            BuildError: If a configured stylesheet cannot be read.
        """

        if self.css_file is None:
            if DEFAULT_CSS_FILE.is_file():
                return DEFAULT_CSS_FILE.read_text(encoding="utf-8")
            return ""

        try:
            return self.css_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise BuildError(self.css_file, str(exc)) from exc

    def date(self) -> str:
        """Return the build date as ``YYYY-MM-DD``."""
        return self.build_date or datetime.date.today().isoformat()


def _read_template(path: Path | None, packaged: str) -> str:
    """Read ``path`` or the packaged template named ``packaged``."""

    if path is None:
        resource = resources.files("booksite") / "templates" / packaged
        return resource.read_text(encoding="utf-8")

    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise BuildError(path, str(exc)) from exc


def _coerce(values: dict[str, Any], source: str) -> dict[str, Any]:
    """Validate configuration keys and convert path values.

    Args:
        values: Raw key/value pairs.
        source: Where the values came from, used in error messages.

    Returns:
        Values ready to pass to ``BuildConfig``.

    Throws:
        ConfigError: If an unknown key is present.
    """

    known = {f.name for f in fields(BuildConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"{source}: unknown settings {', '.join(unknown)}")

    out: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        out[key] = Path(value) if key in _PATH_KEYS else str(value)
    return out


def config_from_env(environ: dict[str, str] | None = None) -> BuildConfig:
    """Build a configuration from ``BOOKSITE_*`` environment variables.

    Args:
        environ: Environment mapping; ``os.environ`` when omitted.

    Returns:
        Configuration with environment values applied over the defaults.
    """

    env = os.environ if environ is None else environ
    values = {key: env[var] for var, key in ENV_VARS.items() if env.get(var)}
    return BuildConfig(**_coerce(values, "environment"))


def read_config_file(path: Path) -> dict[str, Any]:
    """Read configuration values from a YAML file.

    Args:
        path: Location of the YAML file.

    Returns:
        Validated configuration values.

    Throws:
        ConfigError: If the file is not a mapping or has unknown keys.
    """

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"{path}: {exc}") from exc

    # Empty files configure nothing.
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping of settings")

    return _coerce(data, str(path))


def load_config(
    path: Path | None = None, **overrides: Any
) -> BuildConfig:
    """Assemble the build configuration.

    Values are layered as defaults, environment, YAML file, then
    ``overrides``; ``None`` overrides are ignored.

    Args:
        path: YAML file to read. Falls back to ``BOOKSITE_CONFIG`` and then
            ``booksite.yaml`` in the working directory when present.
        **overrides: Explicit values, typically from command line options.

    Returns:
        The resulting configuration.
    """

    config = config_from_env()

    if path is None:
        env_path = os.environ.get("BOOKSITE_CONFIG")
        if env_path:
            path = Path(env_path)
        elif DEFAULT_CONFIG_FILE.is_file():
            path = DEFAULT_CONFIG_FILE

    if path is not None:
        config = evolve(config, **read_config_file(path))

    return evolve(config, **_coerce(overrides, "options"))
