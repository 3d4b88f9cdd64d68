"""Pydantic models for sample automaton catalogs."""

from pydantic import BaseModel, Field, model_validator


class StateSpec(BaseModel):
    """A state with its canvas position."""

    name: str
    x: float = 0.0
    y: float = 0.0
    final: bool = False

    @model_validator(mode="before")
    @classmethod
    def normalize_name(cls, data: dict) -> dict:
        """Accept bare names and numeric names such as ``0``."""
        if isinstance(data, (str, int)):
            return {"name": str(data)}
        if isinstance(data, dict) and isinstance(data.get("name"), int):
            data["name"] = str(data["name"])
        return data


class TransitionSpec(BaseModel):
    """One or more transitions between an ordered pair of states."""

    from_state: str = Field(alias="from")
    to: str
    symbols: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize_transition(cls, data: dict) -> dict:
        """Normalize endpoints to strings and symbols to a list.

        ``symbols`` may be a single symbol, a comma separated string or a list.
        """
        if not isinstance(data, dict):
            return data

        for key in ("from", "to"):
            if isinstance(data.get(key), int):
                data[key] = str(data[key])

        if "symbol" in data:
            if "symbols" in data:
                raise ValueError("give either 'symbol' or 'symbols', not both")
            data["symbols"] = data.pop("symbol")

        symbols = data.get("symbols")
        if symbols is None:
            symbols = []
        elif isinstance(symbols, (str, int)):
            symbols = [s.strip() for s in str(symbols).split(",") if s.strip()]
        else:
            symbols = [str(s) for s in symbols]
        data["symbols"] = symbols
        return data


class AutomatonSpec(BaseModel):
    """A complete automaton description."""

    name: str = ""  # Will be set from the key
    description: str | None = None
    initial: str | None = None
    states: list[StateSpec] = Field(default_factory=list)
    transitions: list[TransitionSpec] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize_initial(cls, data: dict) -> dict:
        if isinstance(data, dict) and isinstance(data.get("initial"), int):
            data["initial"] = str(data["initial"])
        return data

    @property
    def state_names(self) -> list[str]:
        return [state.name for state in self.states]


class SampleCatalog(BaseModel):
    """Root model for a samples YAML file."""

    samples: dict[str, AutomatonSpec] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def normalize_catalog(cls, data: dict) -> dict:
        """Set sample names from keys."""
        if not isinstance(data, dict):
            return data

        samples = data.get("samples", {})
        if isinstance(samples, dict):
            for name, sample in samples.items():
                if sample is None:
                    samples[name] = {"name": name}
                elif isinstance(sample, dict):
                    sample["name"] = name
        return data

    def names(self) -> list[str]:
        return list(self.samples)
