"""
Command-line interface for StaticWeaver.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

import click

from . import __version__
from .config.constants import DEFAULT_TEMPLATE_URL
from .config.settings import Config
from .context import Context
from .downloader import TemplateDownloader
from .engine import Engine, is_url
from .errors import EngineError, TemplateIOError
from .main import build_engine

logger = logging.getLogger(__name__)


def _setup_logging(config: Optional[Config] = None, verbose: bool = False) -> None:
    """
    Setup logging configuration based on config or CLI options.

    Args:
        config: Optional Config object with log_level setting
        verbose: If True, override log level to DEBUG
    """
    # Determine log level
    if verbose:
        log_level = logging.DEBUG
    elif config and config.log_level:
        log_level = getattr(logging, config.log_level.upper(), logging.INFO)
    else:
        log_level = logging.INFO

    # Determine log file
    log_file = "logs/staticweaver.log"
    if config and config.log_file:
        log_file = config.log_file

    # Ensure log directory exists
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    # Configure logging
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file),
        ],
    )


def _parse_pairs(pairs: Tuple[str, ...]) -> Dict[str, str]:
    """Parse ``key=value`` arguments into a dict."""
    parsed = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise click.BadParameter(f"Expected key=value, got '{pair}'", param_hint="--set")
        parsed[key] = value
    return parsed


def _load_config(config: Optional[str]) -> Config:
    try:
        return Config.from_file(config) if config else Config()
    except (ValueError, TypeError) as e:
        raise click.ClickException(f"Invalid configuration: {e}")


@click.group()
@click.version_option(version=__version__, prog_name="staticweaver")
def main():
    """StaticWeaver - delimiter-based template rendering with a page cache.

    Commands:
      render     Render a template file with key=value pairs
      page       Render a layout from the template directory
      fetch      Download a template bundle
      init       Write a default configuration file
      info       Display current configuration
    """
    pass


@main.command()
@click.argument("template_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--set",
    "-s",
    "pairs",
    multiple=True,
    help="Context value as key=value (repeatable)",
)
@click.option("--open", "open_delim", type=str, help="Opening delimiter")
@click.option("--close", "close_delim", type=str, help="Closing delimiter")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def render(template_file: str, pairs: Tuple[str, ...], open_delim: Optional[str],
           close_delim: Optional[str], config: Optional[str], verbose: bool):
    """Render TEMPLATE_FILE as a raw template."""
    cfg = _load_config(config)
    _setup_logging(cfg, verbose)

    engine = Engine.from_config(cfg)
    if open_delim or close_delim:
        engine.set_delimiters(open_delim or engine.open_delim, close_delim or engine.close_delim)

    try:
        try:
            template = Path(template_file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateIOError(f"Cannot read template {template_file}: {e}") from e
        click.echo(engine.render_template(template, Context(_parse_pairs(pairs))))
    except EngineError as e:
        logger.error(f"Render failed: {e}")
        raise click.ClickException(str(e))


@main.command()
@click.argument("layout", type=str)
@click.option(
    "--set",
    "-s",
    "pairs",
    multiple=True,
    help="Context value as key=value (repeatable)",
)
@click.option(
    "--templates",
    "-t",
    type=str,
    help="Template directory or bundle URL (overrides configuration)",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def page(layout: str, pairs: Tuple[str, ...], templates: Optional[str],
         config: Optional[str], verbose: bool):
    """Render LAYOUT (<templates>/<LAYOUT>.html) through the engine."""
    cfg = _load_config(config)
    _setup_logging(cfg, verbose)

    if templates and is_url(templates):
        cfg.template_url = templates
    elif templates:
        cfg.template_path = templates
        cfg.template_url = None

    try:
        engine = build_engine(cfg)
        click.echo(engine.render_page(Context(_parse_pairs(pairs)), layout))
    except EngineError as e:
        logger.error(f"Page render failed: {e}")
        raise click.ClickException(str(e))


@main.command()
@click.argument("url", required=False)
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False),
    help="Output directory (a temporary directory if omitted)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def fetch(url: Optional[str], output: Optional[str], verbose: bool):
    """Download a template bundle from URL (default bundle if omitted)."""
    cfg = Config()
    _setup_logging(cfg, verbose)

    source = url or cfg.template_url or DEFAULT_TEMPLATE_URL
    click.echo(f"📥 Downloading templates from: {source}")

    downloader = TemplateDownloader(timeout=cfg.download_timeout)
    try:
        target = downloader.download_bundle(source, output)
    except EngineError as e:
        logger.error(f"Download failed: {e}")
        raise click.ClickException(str(e))

    click.echo(f"✅ Templates saved to: {target}")


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(),
    help="Path of the configuration file to write",
)
def init(config: Optional[str]):
    """Initialize StaticWeaver configuration and directories."""
    cfg = Config()

    # Create directories
    Path(cfg.template_path).mkdir(parents=True, exist_ok=True)
    Path("configs").mkdir(exist_ok=True)

    # Save default config
    config_path = Path(config) if config else Path("configs/default.yaml")
    cfg.save_to_file(config_path)

    click.echo(f"Configuration initialized at: {config_path}")
    click.echo(f"Template directory: {cfg.template_path}/")


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
def info(config: Optional[str]):
    """Display current configuration."""
    cfg = _load_config(config)

    click.echo("StaticWeaver Configuration:")
    click.echo(f"  Template Path: {cfg.template_path}")
    click.echo(f"  Template URL: {cfg.template_url or '-'}")
    click.echo(f"  Delimiters: {cfg.open_delim} {cfg.close_delim}")
    click.echo(f"  Cache TTL: {cfg.cache_ttl}s")
    click.echo(f"  Cache Capacity: {cfg.cache_capacity if cfg.cache_capacity is not None else 'unbounded'}")


if __name__ == "__main__":
    main()
