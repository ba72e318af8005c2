"""
Logging setup for entry points.

Library modules only create module-level loggers; handlers are configured
here, once, by scripts and applications.
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(log_level: str = 'INFO', log_file: Optional[Union[str, Path]] = None) -> None:
    """Setup logging configuration."""
    handlers = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(str(log_file)))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=LOG_FORMAT,
        handlers=handlers
    )
