"""Animation timing settings."""

from pydantic import BaseModel, ConfigDict, Field


class AnimationSettings(BaseModel):
    """Delays between highlight toggles, in seconds before scaling by ``speed``."""

    model_config = ConfigDict(frozen=True)

    flicker_interval: float = Field(default=0.125, ge=0)
    flicker_count: int = Field(default=3, ge=0)
    transition_on: float = Field(default=0.1, ge=0)
    transition_off: float = Field(default=0.05, ge=0)
    union_on: float = Field(default=0.1, ge=0)
    union_off: float = Field(default=0.1, ge=0)
    speed: float = Field(default=1.0, gt=0)

    def scaled(self, seconds: float) -> float:
        """Delay adjusted for the playback speed."""
        return seconds / self.speed


# Zero delays, for headless tracing
INSTANT = AnimationSettings(
    flicker_interval=0,
    transition_on=0,
    transition_off=0,
    union_on=0,
    union_off=0,
)
