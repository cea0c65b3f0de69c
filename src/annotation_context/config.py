"""Immutable settings for context image extraction.

Settings are read once at process start (see ContextImageConfig.from_env)
and passed to the extractor, so the transform itself never consults the
environment.
"""
import os
from pathlib import Path
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .debug import DebugImageWriter

# --- Geometry constants ---
# Context margin around an annotation, in PDF points
BORDER_WIDTH = 30

# Output pixels per PDF point; pages must be rendered at this zoom
SCALE_UP_FACTOR = 2.0

# Translucent yellow, RGBA
HIGHLIGHT_COLOR = (234, 249, 35, 140)

# Popup placeholder outline width, in PDF points (scaled at draw time)
OUTLINE_WIDTH = 2

_TRUTHY = ("true", "1", "yes", "on")


class ContextImageConfig(BaseModel):
    """Settings shared by every extraction in a process."""
    model_config = ConfigDict(frozen=True)

    border_width: int = Field(default=BORDER_WIDTH, ge=0, description="Context border in PDF points")
    scale_up_factor: float = Field(default=SCALE_UP_FACTOR, gt=0, description="Pixels per PDF point")
    highlight_color: Tuple[int, int, int, int] = Field(default=HIGHLIGHT_COLOR, description="RGBA tint")
    debug: bool = Field(default=False, description="Dump every output image to debug_dir")
    debug_dir: Path = Field(default=Path("."), description="Where debug images are written")

    @field_validator("highlight_color")
    @classmethod
    def check_channels(cls, value):
        if any(channel < 0 or channel > 255 for channel in value):
            raise ValueError(f"Color channels must be in 0-255, got {value}")
        return value

    @property
    def outline_thickness(self) -> int:
        return max(1, round(OUTLINE_WIDTH * self.scale_up_factor))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ContextImageConfig":
        """Build a config from DEBUG / DEBUG_DIR environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests)
            **overrides: Field values that win over the environment
        """
        env = os.environ if environ is None else environ
        values = {
            "debug": env.get("DEBUG", "").strip().lower() in _TRUTHY,
        }
        if env.get("DEBUG_DIR"):
            values["debug_dir"] = Path(env["DEBUG_DIR"])
        values.update(overrides)
        return cls(**values)

    def make_debug_sink(self):
        """Return a DebugImageWriter when debugging is on, otherwise None."""
        if not self.debug:
            return None
        return DebugImageWriter(self.debug_dir)
