"""rebeamer CLI entry point."""

import json
import logging
import sys
from fractions import Fraction
from typing import Any, NoReturn

import click

from rebeamer import __version__
from rebeamer.beam_mode import BeamMode, LegacyBeamMode, convert_beam_mode
from rebeamer.custom_rules import TIME_SIGNATURE_PATTERN, custom_rules_for, load_custom_rules
from rebeamer.timesig_rules import derive_time_signature_rules
from rebeamer.tuplet_rules import derive_tuplet_rules

OUTPUT_FORMATS = ["json", "legacy"]


def _parse_time_signature(time_signature: str) -> tuple[int, int]:
    """Split an ``N/D`` string (spaces around the slash allowed) into its parts."""
    match = TIME_SIGNATURE_PATTERN.match(time_signature)
    if not match:
        raise click.BadParameter(f"'{time_signature}' is not of the form N/D (e.g. 6/8).")
    numerator = int(match.group(1))
    denominator = int(match.group(2))
    if numerator < 1:
        raise click.BadParameter("The numerator must be at least 1.")
    return numerator, denominator


def _parse_unit_duration(unit: str) -> Fraction:
    """
    Resolve a tuplet unit given as a quarter length ("0.5", "1/4") or a
    music21 duration type name ("eighth", "16th", "32nd").
    """
    try:
        value = Fraction(unit.strip())
    except (ValueError, ZeroDivisionError):
        from music21 import duration

        name = unit.strip().lower()
        if name not in duration.typeToDuration:
            known = ", ".join(duration.typeToDuration)
            raise click.BadParameter(f"Unknown duration '{unit}'. Use a quarter length or one of: {known}.")
        value = Fraction(duration.typeToDuration[name]).limit_denominator()
    if value <= 0:
        raise click.BadParameter("The unit duration must be positive.")
    return value


def _emit(rules: Any, output_format: str) -> None:
    if output_format == "legacy":
        payload = rules.to_legacy_array()
        click.echo(json.dumps(payload, default=float))
    else:
        click.echo(json.dumps(rules.to_dict(), indent=2))


def _fail(exc: Exception) -> NoReturn:
    click.echo(f"  ERROR: {exc}", err=True)
    sys.exit(1)


def _legacy_name(value: int) -> str:
    try:
        return LegacyBeamMode(value).name
    except ValueError:
        return "unknown"


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="rebeamer")
@click.option("--verbose", "-v", is_flag=True, help="Log derivation details to stderr.")
def main(verbose: bool) -> None:
    """rebeamer: beaming rules for time signatures and tuplets."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
        )


# ── timesig subcommand ─────────────────────────────────────────────────────────

@main.command()
@click.argument("time_signature")
@click.option(
    "--score-numerator",
    "score_numerators",
    type=click.IntRange(min=1),
    multiple=True,
    metavar="N",
    help="A numerator used elsewhere in the score. Repeat for each one (6/4 beams like 3/2 next to 4/4).",
)
@click.option(
    "--custom",
    "custom_path",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    default=None,
    metavar="PATH",
    help="JSON file of custom beaming rules. Measure boundaries are always added.",
)
@click.option(
    "--measure",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="1-based measure number, used in error messages.",
)
@click.option("--narrow", is_flag=True, help="Clip sub-beam treatments to the overall beam treatment.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default="json",
    show_default=True,
    help="json: named fields. legacy: flat positional array.",
)
def timesig(
    time_signature: str,
    score_numerators: tuple[int, ...],
    custom_path: str | None,
    measure: int,
    narrow: bool,
    output_format: str,
) -> None:
    """
    Print the beaming rules for a time signature.

    \b
    Examples:
      rebeamer timesig 6/8
      rebeamer timesig 6/4 --score-numerator 4
      rebeamer timesig 7/8 --custom my_rules.json --format legacy
    """
    numerator, denominator = _parse_time_signature(time_signature)

    overrides = None
    if custom_path is not None:
        try:
            custom_rules = load_custom_rules(custom_path)
        except (OSError, ValueError) as exc:
            _fail(exc)
        overrides = custom_rules_for(custom_rules, numerator, denominator)

    try:
        rules = derive_time_signature_rules(
            numerator,
            denominator,
            custom=custom_path is not None,
            score_numerators=score_numerators,
            measure_index=measure - 1,
            overrides=overrides,
        )
    except ValueError as exc:
        _fail(exc)

    if narrow:
        rules = rules.narrowed()
    _emit(rules, output_format.lower())


# ── tuplet subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("count", type=click.IntRange(min=1))
@click.argument("unit")
@click.option("--narrow", is_flag=True, help="Clip sub-beam treatments to the overall beam treatment.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default="json",
    show_default=True,
    help="json: named fields. legacy: flat positional array.",
)
def tuplet(count: int, unit: str, narrow: bool, output_format: str) -> None:
    """
    Print the beaming rules for a tuplet of COUNT notes of UNIT each.

    UNIT is a quarter length (0.5, 1/4) or a duration name (eighth, 16th).

    \b
    Examples:
      rebeamer tuplet 3 eighth
      rebeamer tuplet 5 0.25 --format legacy
    """
    unit_duration = _parse_unit_duration(unit)
    rules = derive_tuplet_rules(count, unit_duration)
    if narrow:
        rules = rules.narrowed()
    _emit(rules, output_format.lower())


# ── beam-mode subcommand ───────────────────────────────────────────────────────

@main.command(name="beam-mode")
@click.argument("values", type=int, nargs=-1, required=True)
def beam_mode(values: tuple[int, ...]) -> None:
    """
    Convert MuseScore 3 beam mode VALUES to MuseScore 4 values.

    \b
    Examples:
      rebeamer beam-mode 0 1 2 3
    """
    for value in values:
        converted = convert_beam_mode(value)
        legacy_name = _legacy_name(value)
        click.echo(f"{value:>4} ({legacy_name:<8}) -> {converted} ({BeamMode(converted).name})")
