import importlib
import logging
import subprocess
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from types import ModuleType
from typing import Optional

import click
from dotenv import load_dotenv

from booksite.builder import BuildError, ConfigError, build_site
from booksite.config import load_config

try:
    __version__ = version("booksite")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option("--trace/--no-trace", default=False)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="BOOKSITE_LOG_FILE",
)
@click.version_option(__version__, prog_name="booksite")
def cli(debug: bool, trace: bool, log_file: Optional[str] = None) -> None:
    """Configure logging and load environment variables.

    Args:
        debug: Toggle debug logging.
        trace: Toggle trace logging.
        log_file: Optional path to the log file.
    """
    if trace:
        level = 1
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if trace:
        logging.debug("Trace mode is on")
    if debug:
        logging.debug("Debug mode is on")
    load_dotenv()


def _optional_path(value: Optional[str]) -> Optional[Path]:
    """Convert an optional command line path."""
    return Path(value) if value else None


@cli.command()
@click.argument(
    "content_dir",
    required=False,
    type=click.Path(file_okay=False, dir_okay=True),
)
@click.argument(
    "output_dir",
    required=False,
    type=click.Path(file_okay=False, dir_okay=True),
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="YAML file with build settings.",
)
@click.option(
    "--template",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Page template used for every chapter.",
)
@click.option(
    "--library-template",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Template of the page listing all books.",
)
@click.option(
    "--css",
    "css_file",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Stylesheet inlined into every page.",
)
@click.option(
    "--build-date",
    default=None,
    help="Date shown in page footers (defaults to today).",
)
def build(
    content_dir: Optional[str] = None,
    output_dir: Optional[str] = None,
    config_path: Optional[str] = None,
    template: Optional[str] = None,
    library_template: Optional[str] = None,
    css_file: Optional[str] = None,
    build_date: Optional[str] = None,
) -> None:
    """Render every Markdown book below CONTENT_DIR into OUTPUT_DIR.

    Args:
        content_dir: Directory with one sub-directory per book.
        output_dir: Directory receiving the generated pages.
        config_path: Optional YAML configuration file.
        template: Optional page template.
        library_template: Optional landing page template.
        css_file: Optional stylesheet.
        build_date: Optional date for page footers.
    """

    try:
        config = load_config(
            _optional_path(config_path),
            content_dir=_optional_path(content_dir),
            output_dir=_optional_path(output_dir),
            template=_optional_path(template),
            library_template=_optional_path(library_template),
            css_file=_optional_path(css_file),
            build_date=build_date,
        )

        # Stop at the first failing file; partial sites are not useful.
        result = build_site(config)
    except (BuildError, ConfigError) as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Built {len(result.pages)} pages in {result.books} books")


def _import_web_module(module: str) -> ModuleType:
    """Import a module requiring the optional web dependencies.

    Args:
        module: Absolute module name to import.

    Returns:
        The imported module.

    Throws:
        click.ClickException: If the module or its dependencies are missing.
    """

    try:
        # Attempt to import the requested module.
        return importlib.import_module(module)
    except ModuleNotFoundError as exc:  # pragma: no cover - narrow except
        # Inform the user that web extras are required.
        click.echo(
            "This command requires optional web dependencies.\n"
            "Install them with `pip install -e .[web]`."
        )

        # Offer to install the dependencies immediately.
        if click.confirm("Install them now?", default=False):
            subprocess.run(
                [sys.executable, "-m", "pip", "install", "-e", ".[web]"],
                check=True,
            )
            return _import_web_module(module)

        # Abort execution with a clear message.
        raise click.ClickException("Missing web dependencies") from exc


@cli.command()
@click.argument(
    "output_dir",
    required=False,
    type=click.Path(file_okay=False, dir_okay=True),
)
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=8000, show_default=True)
def serve(
    output_dir: Optional[str] = None,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Serve a built site for local preview."""

    try:
        site_dir = _optional_path(output_dir) or load_config().output_dir
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if not site_dir.is_dir():
        raise click.ClickException(
            f"{site_dir} does not exist; run `booksite build` first."
        )

    # Import the web application and the server lazily.
    web = _import_web_module("booksite.web")
    uvicorn = _import_web_module("uvicorn")

    click.echo(f"Serving {site_dir} at http://{host}:{port}/")
    uvicorn.run(web.create_app(site_dir), host=host, port=port)
