"""Entry point for running nuedb as a module (python -m nuedb)."""

import argparse
import logging
from dataclasses import replace

from .config import Settings
from .logging_config import setup_logging
from .server import create_app
from .store import Store
from .sweeper import Sweeper

logger = logging.getLogger('nuedb')


def main():
    """Main entry point for the nuedb server."""
    parser = argparse.ArgumentParser(description='nuedb HTTP API server')
    parser.add_argument('--host', type=str, help='Interface to bind (default: from HOST env or 0.0.0.0)')
    parser.add_argument('--port', type=int, help='HTTP server port (default: from PORT env or 3000)')
    parser.add_argument('--data-dir', type=str,
                        help='Directory for the data file (default: from DATA_DIR env or ./data)')
    parser.add_argument('--log-level', type=str, help='Logging level (default: from LOG_LEVEL env or INFO)')
    args = parser.parse_args()

    # Flags override the environment
    settings = Settings.from_env()
    overrides = {
        'host': args.host,
        'port': args.port,
        'data_dir': args.data_dir,
        'log_level': args.log_level,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    setup_logging(settings.log_level, settings.log_file)

    store = Store(settings.data_path, retention_ms=settings.retention_ms,
                  max_size=settings.max_db_size)
    logger.info('Using data file %s', settings.data_path)

    sweeper = None
    if settings.sweep_interval > 0:
        sweeper = Sweeper(store, settings.sweep_interval)
        sweeper.start()

    app = create_app(store, settings)

    logger.info('Starting nuedb server on %s:%d', settings.host, settings.port)
    try:
        app.run(host=settings.host, port=settings.port, debug=False, threaded=True)
    finally:
        if sweeper is not None:
            sweeper.stop()


if __name__ == '__main__':
    main()
