"""Optional sink that dumps every produced context image to disk."""
import logging
import secrets
from pathlib import Path
from typing import Any, Callable

import numpy as np

from .rendering import save_image

logger = logging.getLogger(__name__)

# Any callable taking the finished image can act as a sink; its return value is ignored
DebugSink = Callable[[np.ndarray], Any]


class DebugImageWriter:
    """Write each image to ``<directory>/context-<random>.png``."""

    def __init__(self, directory: Path = Path(".")):
        self.directory = Path(directory)

    def __call__(self, img: np.ndarray) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        output = self.directory / f"context-{secrets.token_hex(8)}.png"
        logger.info(f"Saving debug image to {output.resolve()}")
        return save_image(output, img)
