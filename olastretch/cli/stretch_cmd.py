# olastretch/cli/stretch_cmd.py

"""
CLI commands for time scaling audio files and inspecting the scaling geometry.
"""

import logging
from pathlib import Path
from typing import Optional

import click
import numpy as np

from olastretch.config.models import OlaStretchConfig
from olastretch.core.audio.io import load_audio, save_audio
from olastretch.core.timescale import TimeScaleSession

logger = logging.getLogger(__name__)


def _get_config(ctx: click.Context) -> OlaStretchConfig:
    obj = ctx.find_root().obj
    if isinstance(obj, dict) and isinstance(obj.get('config'), OlaStretchConfig):
        return obj['config']
    return OlaStretchConfig()


def _build_session(
    config: OlaStretchConfig,
    samples: np.ndarray,
    factor: Optional[float],
    window_length: Optional[int],
    ramp_proportion: Optional[float]
) -> TimeScaleSession:
    """Fills unset options from the ``timescale`` config section."""
    ts_cfg = config.timescale
    return TimeScaleSession(
        samples,
        window_length=ts_cfg.window_length if window_length is None else window_length,
        ramp_proportion=ts_cfg.ramp_proportion if ramp_proportion is None else ramp_proportion,
        scale_factor=ts_cfg.scale_factor if factor is None else factor,
    )


# --- Common Options ---
input_argument = click.argument("input_file", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
factor_option = click.option("-f", "--factor", type=float, default=None,
                             help="Output duration / input duration (0 < f < 1.5). >1 lengthens, <1 shortens.")
window_option = click.option("--window-length", type=int, default=None,
                             help="Analysis window length in samples (even, <= input length).")
ramp_option = click.option("--ramp-proportion", type=float, default=None,
                           help="Fraction of the window used for crossfades (0.0 to 1.0).")


# --- Stretch Command ---
@click.command("stretch")
@input_argument
@click.option("-o", "--output", type=click.Path(dir_okay=False, resolve_path=True), required=True,
              help="Output file path for the time-scaled audio.")
@factor_option
@window_option
@ramp_option
@click.option("--sr", type=int, default=None,
              help="Resample the input to this rate before scaling (default: config or native rate).")
@click.option("--subtype", type=str, default=None,
              help="soundfile subtype for the output (e.g. PCM_16, FLOAT).")
@click.pass_context
def stretch_cmd(
    ctx,
    input_file: str,
    output: str,
    factor: Optional[float],
    window_length: Optional[int],
    ramp_proportion: Optional[float],
    sr: Optional[int],
    subtype: Optional[str]
):
    """Change the duration of an audio file without changing its pitch."""
    config = _get_config(ctx)
    input_path = Path(input_file)
    output_path = Path(output)
    target_sr = sr if sr is not None else (config.defaults.default_sample_rate or None)
    subtype = subtype or config.defaults.default_output_subtype

    logger.info(f"Running 'stretch' on: {input_path}")
    logger.info(f"Output file: {output_path}")

    try:
        samples, sample_rate = load_audio(input_path, sr=target_sr, mono=True)
        session = _build_session(config, samples, factor, window_length, ramp_proportion)
        logger.info(f"Params: {session!r}")
        stretched = session.synthesize()
        save_audio(stretched, sample_rate, output_path, subtype=subtype)
    except FileNotFoundError:
        raise click.UsageError(f"Input file not found: {input_path}")
    except ValueError as e:
        raise click.UsageError(f"Error during time scaling: {e}")
    except Exception as e:
        logger.error(f"An unexpected error occurred during time scaling: {e}", exc_info=True)
        raise click.Abort()

    click.echo(
        f"Scaled '{input_path.name}' by {session.scale_factor} "
        f"({session.input_length} -> {session.output_length} samples), saved to '{output_path}'."
    )


# --- Info Command ---
@click.command("info")
@input_argument
@factor_option
@window_option
@ramp_option
@click.pass_context
def info_cmd(
    ctx,
    input_file: str,
    factor: Optional[float],
    window_length: Optional[int],
    ramp_proportion: Optional[float]
):
    """Show the window and crossfade geometry for an audio file."""
    config = _get_config(ctx)
    input_path = Path(input_file)
    target_sr = config.defaults.default_sample_rate or None

    try:
        samples, sample_rate = load_audio(input_path, sr=target_sr, mono=True)
        session = _build_session(config, samples, factor, window_length, ramp_proportion)
    except FileNotFoundError:
        raise click.UsageError(f"Input file not found: {input_path}")
    except ValueError as e:
        raise click.UsageError(f"Invalid time scaling parameters: {e}")
    except Exception as e:
        logger.error(f"An unexpected error occurred while reading '{input_path.name}': {e}", exc_info=True)
        raise click.Abort()

    rows = [
        ("sample rate", f"{sample_rate} Hz"),
        ("input samples", f"{session.input_length} ({session.input_length / sample_rate:.3f} s)"),
        ("output samples", f"{session.output_length} ({session.output_length / sample_rate:.3f} s)"),
        ("scale factor", f"{session.scale_factor}"),
        ("window length", f"{session.window_length}"),
        ("input stride", f"{session.half_window}"),
        ("output stride", f"{session.scaled_half_window}"),
        ("ramp length", f"{session.ramp_length}"),
        ("bins", f"{session.number_of_bins}"),
    ]
    width = max(len(name) for name, _ in rows)
    for name, value in rows:
        click.echo(f"{name:<{width}}  {value}")
