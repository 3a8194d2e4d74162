"""
Main execution logic for StaticWeaver.
"""

import logging

from .config.settings import Config
from .engine import Engine

logger = logging.getLogger(__name__)


def build_engine(config: Config) -> Engine:
    """
    Create an engine ready to render pages.

    When ``template_url`` is configured the bundle is downloaded first and
    the engine points at the downloaded directory.

    Args:
        config: Configuration object with all settings
    """
    logger.info("Initializing StaticWeaver engine")

    engine = Engine.from_config(config)

    if config.template_url:
        engine.template_path = engine.create_template_folder(config.template_url)
        logger.info(f"Using templates from {engine.template_path}")

    return engine


def main():
    """Main entry point for CLI usage."""
    from .cli import main as cli_main
    cli_main()


if __name__ == "__main__":
    main()
