"""YAML loading for sample catalogs, and building automata from them."""

import logging
import random
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..model.automaton import AutomatonGraph
from .errors import SchemaLoadError, SchemaValidationError, UnknownSampleError
from .models import AutomatonSpec, SampleCatalog

logger = logging.getLogger(__name__)

SAMPLES_PATH = Path(__file__).parent / "samples.yaml"


def load_yaml(path: str | Path) -> dict:
    """Load a YAML file and return the raw data.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed YAML data as a dictionary.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise SchemaLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise SchemaLoadError(f"Not a file: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}", str(path)) from e
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected YAML mapping at root, got {type(data).__name__}", str(path)
        )

    return data


def parse_samples(path: str | Path) -> SampleCatalog:
    """Load and parse a YAML file into a SampleCatalog.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the data fails validation.
    """
    data = load_yaml(path)
    return _parse_catalog_data(data)


def parse_samples_from_string(yaml_string: str) -> SampleCatalog:
    """Parse a YAML string into a SampleCatalog.

    Args:
        yaml_string: The YAML content as a string.

    Returns:
        The parsed SampleCatalog.

    Raises:
        SchemaLoadError: If the YAML cannot be parsed.
        SchemaValidationError: If the data fails validation.
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected YAML mapping at root, got {type(data).__name__}")

    return _parse_catalog_data(data)


def load_samples() -> SampleCatalog:
    """The catalog shipped with the package."""
    return parse_samples(SAMPLES_PATH)


def get_sample(name: str, catalog: SampleCatalog | None = None) -> AutomatonSpec:
    """Look up a sample by name.

    Raises:
        UnknownSampleError: If the catalog has no such sample.
    """
    catalog = catalog or load_samples()
    try:
        return catalog.samples[name]
    except KeyError:
        raise UnknownSampleError(name, catalog.names()) from None


def build_automaton(
    spec: AutomatonSpec, rng: random.Random | None = None
) -> AutomatonGraph:
    """Create an automaton graph from a spec.

    States are created in order, then the initial and final states are set,
    then transitions are joined. References to unknown states are skipped
    with a warning, the way the graph itself ignores them.

    Args:
        spec: The automaton description.
        rng: Source of the random curve skews. Pass a seeded instance for
            reproducible geometry.

    Returns:
        The populated graph.
    """
    automaton = AutomatonGraph(rng=rng)

    for state in spec.states:
        automaton.create_state(state.name, state.x, state.y)

    if spec.initial is not None and not automaton.set_initial_state(spec.initial):
        logger.warning("Sample %r: unknown initial state %r", spec.name, spec.initial)

    for state in spec.states:
        if state.final:
            automaton.set_final_state(state.name)

    for transition in spec.transitions:
        for symbol in transition.symbols:
            if not automaton.join(transition.from_state, transition.to, symbol):
                logger.warning(
                    "Sample %r: cannot join %r -> %r on %r",
                    spec.name,
                    transition.from_state,
                    transition.to,
                    symbol,
                )

    logger.debug(
        "Built sample %r with %d states", spec.name, len(automaton.get_states())
    )
    return automaton


def _parse_catalog_data(data: dict) -> SampleCatalog:
    """Parse raw data into a SampleCatalog.

    Raises:
        SchemaValidationError: If the data fails validation.
    """
    try:
        return SampleCatalog.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise SchemaValidationError(
            f"Schema validation failed with {len(errors)} error(s)", errors
        ) from e
