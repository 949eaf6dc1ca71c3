"""
Logging configuration for the minorbodies package.

Records are routed by subpackage:

- population engine (`minorbodies.algorithms.population`): console and
  `population.log`. The builder logs one line per load, save and generation
  pass at INFO; the group and codec log capacity growth and per-blob loads
  at DEBUG, which only reaches the file.
- transform diagnostics (`...population.diagnostics`): min/max summaries of
  debug transforms go to their own `diagnostics.log` and never to the console.
- models (`minorbodies.models`): registry and Lagrange point messages at INFO.
- everything else propagates to the root logger, which also feeds
  `error.log`.

Usage:
    Call setup_logging() once, before building populations:

    ```python
    from minorbodies.logging_config import setup_logging
    setup_logging(log_dir="logs")
    ```
"""

import logging
import logging.config
from pathlib import Path

POPULATION_LOGGER = 'minorbodies.algorithms.population'
DIAGNOSTICS_LOGGER = POPULATION_LOGGER + '.diagnostics'
BUILDER_LOGGER = POPULATION_LOGGER + '.builder'
MODELS_LOGGER = 'minorbodies.models'

_MAX_BYTES = 10485760  # 10 MB


def _rotating_file(path, level):
    return {
        'class': 'logging.handlers.RotatingFileHandler',
        'level': level,
        'formatter': 'detailed',
        'filename': str(path),
        'maxBytes': _MAX_BYTES,
        'backupCount': 5,
        'encoding': 'utf8'
    }


def setup_logging(default_level=logging.INFO, log_dir="logs", console_level=logging.INFO):
    """
    Setup logging configuration for the package.

    Parameters
    ----------
    default_level : int, optional
        Level of the root logger. Default is logging.INFO.
    log_dir : str or Path, optional
        Directory to store log files. Default is "logs".
    console_level : int, optional
        Lowest level echoed to stdout. Default is logging.INFO, so DEBUG
        records of the population engine are written to file only.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                'datefmt': '%H:%M:%S'
            },
            'detailed': {
                'format': '%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
            'summary': {
                'format': '%(asctime)s %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': logging.getLevelName(console_level),
                'formatter': 'standard',
                'stream': 'ext://sys.stdout',
            },
            'population_file': _rotating_file(log_path / 'population.log', 'DEBUG'),
            'error_file': _rotating_file(log_path / 'error.log', 'ERROR'),
            'diagnostics_file': dict(_rotating_file(log_path / 'diagnostics.log', 'DEBUG'), formatter='summary'),
        },
        'loggers': {
            '': {  # root logger
                'handlers': ['console', 'error_file'],
                'level': default_level,
            },
            POPULATION_LOGGER: {
                'handlers': ['console', 'population_file', 'error_file'],
                'level': 'DEBUG',
                'propagate': False
            },
            BUILDER_LOGGER: {
                'level': 'INFO',
            },
            DIAGNOSTICS_LOGGER: {
                'handlers': ['diagnostics_file'],
                'level': 'DEBUG',
                'propagate': False
            },
            MODELS_LOGGER: {
                'handlers': ['console', 'population_file'],
                'level': 'INFO',
                'propagate': False
            },
        }
    }

    logging.config.dictConfig(config)
    logging.getLogger(__name__).debug(f"Logging configured, files in {log_path}")
