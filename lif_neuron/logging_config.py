"""
Logging Configuration
The engine, the parameter loaders and the HTTP layer log through module
loggers under the ``lif_neuron`` namespace. Entry points (``scripts/demo_lif.py``,
``app_streamlit.py``) call :func:`setup_logging` once; library use leaves the
namespace unconfigured so records simply propagate to the host application.
"""
import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "lif_neuron"


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optionally file) output to the 'lif_neuron' logger.

    Run summaries are logged at INFO, the start of each run at DEBUG.

    Args:
        level: Logging level as a number or a name such as "DEBUG".
        log_file: Optional path that receives the same records as stdout.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Streamlit reruns the script on every interaction
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
