"""Colors and fonts used by the renderer and shapes."""

from pydantic import BaseModel, ConfigDict, Field


class Theme(BaseModel):
    """Cosmetic drawing settings."""

    model_config = ConfigDict(frozen=True)

    background: str = "white"

    state_stroke: str = "black"
    state_fill: str = "white"
    state_highlight_fill: str = "orange"
    state_label_color: str = "black"
    state_font: str = "25px Times New Roman"
    final_ring_ratio: float = Field(default=0.7, gt=0, lt=1)

    arrow_color: str = "black"
    arrow_highlight: str = "red"
    arrow_font: str = "20px Times New Roman"


DEFAULT_THEME = Theme()
