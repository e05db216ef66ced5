"""CLI entry point."""

import os
import sys
from pathlib import Path

from common.logging_config import setup_logging
from cli.config import Config
from cli.repl import run


def main() -> None:
    """Entry point for CLI."""
    log_level = 'DEBUG' if '--debug' in sys.argv else os.getenv('LOG_LEVEL', 'WARNING')

    logger = setup_logging('cli', log_level=log_level)

    if '--debug' in sys.argv:
        logger.info("Debug logging enabled")
        sys.argv.remove('--debug')

    config_path = Path(os.getenv('VAULT_CONFIG', Path.home() / '.vault' / 'config.json'))
    config = Config(config_path)

    logger.info(f"CLI starting [service={config.get_base_url()}]")
    try:
        run(config)
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        logger.info("CLI exiting")


if __name__ == "__main__":
    main()
