"""Command-line interface for DFA Studio."""

import asyncio
import logging
import random
import sys

import click

from .geometry.renderer import Renderer
from .geometry.svg import SvgSurface
from .output.formatter import format_simulation_result, format_validation_result
from .schema.errors import SchemaLoadError, SchemaValidationError, UnknownSampleError
from .schema.loader import build_automaton, get_sample, load_samples
from .schema.models import AutomatonSpec
from .simulation.sequencer import AnimationStep, Sequencer, SimulationPhase
from .simulation.settings import INSTANT, AnimationSettings
from .validators.runner import run_validators

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _load_sample(name: str) -> AutomatonSpec:
    """Look up a packaged sample, exiting with status 2 on failure."""
    try:
        return get_sample(name)
    except UnknownSampleError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)
    except SchemaLoadError as e:
        click.echo(f"Error loading samples: {e}", err=True)
        sys.exit(2)
    except SchemaValidationError as e:
        click.echo(f"Schema validation error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(2)


@click.group()
@click.version_option()
@click.option(
    "--log-level",
    envvar="DFA_STUDIO_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level (defaults to DFA_STUDIO_LOG_LEVEL env var)",
)
def main(log_level: str):
    """DFA Studio: build, check and simulate finite automata."""
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT, stream=sys.stderr)


@main.command()
def samples():
    """List the packaged sample automata."""
    try:
        catalog = load_samples()
    except (SchemaLoadError, SchemaValidationError) as e:
        click.echo(f"Error loading samples: {e}", err=True)
        sys.exit(2)

    for name, spec in catalog.samples.items():
        line = name
        if spec.description:
            line += f" - {spec.description}"
        click.echo(line)


@main.command()
@click.argument("sample")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def check(sample: str, output_format: str, strict: bool):
    """Check a sample automaton for structural problems.

    SAMPLE is the name of a packaged sample (see `dfa-studio samples`).

    Exit codes:
      0 - Check passed
      1 - Check failed (errors found)
      2 - Unknown sample or schema error
    """
    automaton = build_automaton(_load_sample(sample))
    result = run_validators(automaton)

    output = format_validation_result(result, output_format)  # type: ignore
    click.echo(output)

    if result.has_errors:
        sys.exit(1)
    elif strict and result.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command()
@click.argument("sample")
@click.argument("word", default="")
@click.option(
    "--animate",
    is_flag=True,
    default=False,
    help="Print every highlight step with real delays",
)
@click.option(
    "--speed",
    envvar="DFA_STUDIO_SPEED",
    type=click.FloatRange(min=0, min_open=True),
    default=1.0,
    show_default=True,
    help="Playback speed multiplier for --animate",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def simulate(sample: str, word: str, animate: bool, speed: float, output_format: str):
    """Run WORD through a sample automaton.

    SAMPLE is the name of a packaged sample; each character of WORD is
    one input symbol.

    Exit codes:
      0 - Word accepted
      1 - Word rejected or simulation aborted
      2 - Unknown sample or schema error
    """
    automaton = build_automaton(_load_sample(sample))

    if animate:
        sequencer = Sequencer(automaton, AnimationSettings(speed=speed))

        def echo_step(step: AnimationStep) -> None:
            marker = "+" if step.highlighted else "-"
            name = getattr(step.target, "name", None) or getattr(step.target, "label", "")
            click.echo(f"{marker} {step.phase.value:<13} {name}")

        result = asyncio.run(sequencer.run(word, on_step=echo_step))
    else:
        result = Sequencer(automaton, INSTANT).trace(word)

    click.echo(format_simulation_result(result, output_format))  # type: ignore

    if result.phase == SimulationPhase.DONE and result.accepted:
        sys.exit(0)
    sys.exit(1)


@main.command()
@click.argument("sample")
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for the random curve skews",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the SVG to a file instead of stdout",
)
@click.option("--width", type=int, default=800, show_default=True)
@click.option("--height", type=int, default=600, show_default=True)
def render(sample: str, seed: int | None, output: str | None, width: int, height: int):
    """Render a sample automaton as SVG.

    Exit codes:
      0 - Success
      2 - Unknown sample or schema error
    """
    automaton = build_automaton(_load_sample(sample), rng=random.Random(seed))

    surface = SvgSurface(width=width, height=height)
    Renderer().render(automaton, surface)
    svg = surface.to_svg()

    if output is None:
        click.echo(svg)
    else:
        with open(output, "w", encoding="utf-8") as f:
            f.write(svg)
        click.echo(f"Wrote {output}")
    sys.exit(0)


if __name__ == "__main__":
    main()
