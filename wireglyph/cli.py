"""CLI entry point and commands."""

from __future__ import annotations

import logging
import time

import click
import numpy as np

from wireglyph.config import PRESETS, EngineConfig, build_engine
from wireglyph.driver import driver_for
from wireglyph.errors import DefinitionError
from wireglyph.export import save_gif, save_text
from wireglyph.frame import STYLES
from wireglyph.logging_config import setup_logging
from wireglyph.rotation import normalize_angles

log = logging.getLogger(__name__)

HOME = "\033[H"
CLEAR = "\033[2J"


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _parse_angles(ctx, param, values):
    """Turn repeated AXIS=DEGREES options into a radians mapping."""
    angles = {}
    for raw in values:
        pair, sep, deg = raw.partition("=")
        if not sep or not pair.strip():
            raise click.BadParameter(f"expected AXIS=DEGREES (e.g. XY=30), got {raw!r}")
        try:
            angles[pair.strip().upper()] = float(np.radians(float(deg)))
        except ValueError:
            raise click.BadParameter(f"angle {deg!r} is not a number") from None
    return angles


def _engine(preset, style=None, seed=None, canvas=None):
    try:
        config = EngineConfig.from_preset(preset, style=style, seed=seed, canvas_size=canvas)
        return config, *build_engine(config)
    except (DefinitionError, ValueError, KeyError) as e:
        raise click.ClickException(str(e)) from None


def _frames(config, shape, buffer, count, seed):
    driver = driver_for(config.name, config.rotation_order, rng=seed)
    return buffer.render_many(shape, driver.frames(count))


preset_option = click.option(
    "--preset",
    type=click.Choice(sorted(PRESETS)),
    default="tesseract",
    show_default=True,
    help="Shape and canvas preset.",
)
seed_option = click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed glyph texture and angle jitter for reproducible output.",
)
style_option = click.option(
    "--style",
    type=click.Choice(STYLES),
    default=None,
    help="Anti-aliased density glyphs or plain line strokes.",
)
canvas_option = click.option(
    "--canvas",
    type=click.IntRange(min=1),
    default=None,
    help="Override the preset's canvas size (cells per side).",
)


# ---------------------------------------------------------------------------
# commands
# ---------------------------------------------------------------------------


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also write logs to this file.")
def cli(verbose: bool, log_file: str | None) -> None:
    """Wireglyph: rotating wireframe polytopes drawn in ASCII."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING, log_file)


@cli.command()
@preset_option
@style_option
@seed_option
@canvas_option
@click.option(
    "--angle",
    "angles",
    multiple=True,
    callback=_parse_angles,
    help="Rotation as AXIS=DEGREES, e.g. --angle XY=30 --angle ZW=15. Repeatable.",
)
def show(preset: str, style: str | None, seed: int | None, canvas: int | None, angles: dict) -> None:
    """Print a single frame."""
    config, shape, buffer = _engine(preset, style, seed, canvas)
    try:
        normalize_angles(angles, config.rotation_order)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--angle") from None
    click.echo(buffer.render(shape, angles).text)


@cli.command()
@preset_option
@style_option
@seed_option
@canvas_option
@click.option("--frames", "count", type=click.IntRange(min=1), default=600, show_default=True, help="Frames to play.")
@click.option("--delay", type=click.FloatRange(min=0.0), default=0.03, show_default=True, help="Seconds between frames.")
def spin(preset: str, style: str | None, seed: int | None, canvas: int | None, count: int, delay: float) -> None:
    """Animate the preset in the terminal."""
    config, shape, buffer = _engine(preset, style, seed, canvas)
    click.echo(CLEAR, nl=False)
    try:
        for frame in _frames(config, shape, buffer, count, seed):
            click.echo(HOME + frame.text)
            if delay:
                time.sleep(delay)
    except KeyboardInterrupt:
        log.debug("spin interrupted")


@cli.command()
@preset_option
@style_option
@seed_option
@canvas_option
@click.option("--frames", "count", type=click.IntRange(min=1), default=72, show_default=True, help="Frames to write.")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["gif", "txt"]),
    default="gif",
    show_default=True,
    help="Animated GIF or one text file per frame.",
)
@click.option(
    "--out",
    type=click.Path(),
    default=None,
    help="Output file (gif) or directory (txt). Defaults to <preset>.gif or frames/<preset>.",
)
@click.option("--duration", type=click.IntRange(min=1), default=30, show_default=True, help="GIF milliseconds per frame.")
def export(
    preset: str,
    style: str | None,
    seed: int | None,
    canvas: int | None,
    count: int,
    fmt: str,
    out: str | None,
    duration: int,
) -> None:
    """Write frames to disk."""
    config, shape, buffer = _engine(preset, style, seed, canvas)
    frames = list(_frames(config, shape, buffer, count, seed))

    if fmt == "gif":
        path = save_gif(frames, out or f"{preset}.gif", duration=duration)
        click.echo(f"Saved {len(frames)} frames to {path}")
    else:
        paths = save_text(frames, out or f"frames/{preset}")
        click.echo(f"Saved {len(paths)} frames to {paths[0].parent}")
