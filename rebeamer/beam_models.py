"""Data models for derived beaming rules."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import IntEnum
from fractions import Fraction
from typing import Any, Iterable, Union

# Elapsed subdivision units: ints where whole, Fractions otherwise (e.g. 7/16
# gives 3.5 eighths).
Unit = Union[int, Fraction]
SplitPoints = tuple[Unit, ...]

SEQUENCE_FIELDS: tuple[str, ...] = (
    "split_points_8",
    "split_points_16",
    "split_points_32",
    "sub_display_8_in_16",
    "sub_display_8_in_32",
    "sub_display_16_in_32",
)

TREATMENT_FIELDS: tuple[str, ...] = (
    "beam_treatment",
    "eighth_sub_treatment",
    "sixteenth_sub_treatment",
    "thirty_second_sub_treatment",
)


class BeamTreatment(IntEnum):
    """Which note categories a beaming rule applies to.

    The integer values are the codes used by the original plugin presets.
    """

    NONE = 0
    RESTS_ONLY = 1
    NOTES_ONLY = 2
    BOTH = 3

    @property
    def applies_to_rests(self) -> bool:
        return self in (BeamTreatment.RESTS_ONLY, BeamTreatment.BOTH)

    @property
    def applies_to_notes(self) -> bool:
        return self in (BeamTreatment.NOTES_ONLY, BeamTreatment.BOTH)


def narrow_treatment(beam_treatment: BeamTreatment, sub_treatment: BeamTreatment) -> BeamTreatment:
    """
    Clip a sub-beam treatment so it never applies wider than the overall one.

    This is the meet of both values in the lattice
    ``NONE < RESTS_ONLY, NOTES_ONLY < BOTH``.
    """
    rests = beam_treatment.applies_to_rests and sub_treatment.applies_to_rests
    notes = beam_treatment.applies_to_notes and sub_treatment.applies_to_notes
    if rests and notes:
        return BeamTreatment.BOTH
    if rests:
        return BeamTreatment.RESTS_ONLY
    if notes:
        return BeamTreatment.NOTES_ONLY
    return BeamTreatment.NONE


def to_unit(value: Any) -> Unit:
    """Normalise a numeric value to an int where whole, a Fraction otherwise."""
    fraction = Fraction(value)
    if fraction.denominator == 1:
        return int(fraction)
    return fraction


def as_split_points(values: Iterable[Any]) -> SplitPoints:
    return tuple(to_unit(v) for v in values)


def _jsonable_unit(value: Unit) -> int | float:
    if isinstance(value, Fraction):
        return float(value)
    return value


class _RuleSetMixin:
    """Shared behaviour for the frozen rule-set dataclasses."""

    def narrowed(self) -> Any:
        """Return a copy whose sub-treatments never exceed ``beam_treatment``."""
        beam = self.beam_treatment  # type: ignore[attr-defined]
        changes = {
            name: narrow_treatment(beam, getattr(self, name))
            for name in TREATMENT_FIELDS[1:]
        }
        return replace(self, **changes)  # type: ignore[type-var]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if f.name in SEQUENCE_FIELDS:
                data[f.name] = [_jsonable_unit(v) for v in value]
            elif isinstance(value, BeamTreatment):
                data[f.name] = value.name
            else:
                data[f.name] = value
        return data

    def to_legacy_array(self) -> list[Any]:
        """Flat positional form: six sequences, then the integer treatment codes."""
        sequences: list[Any] = [list(getattr(self, name)) for name in SEQUENCE_FIELDS]
        codes: list[Any] = [int(getattr(self, name)) for name in TREATMENT_FIELDS]
        return sequences + codes


@dataclass(frozen=True)
class BeamRuleSet(_RuleSetMixin):
    """Beam split points and subdivision displays for one full measure."""

    split_points_8: SplitPoints
    split_points_16: SplitPoints
    split_points_32: SplitPoints
    sub_display_8_in_16: SplitPoints
    sub_display_8_in_32: SplitPoints
    sub_display_16_in_32: SplitPoints
    beam_treatment: BeamTreatment = BeamTreatment.BOTH
    eighth_sub_treatment: BeamTreatment = BeamTreatment.RESTS_ONLY
    sixteenth_sub_treatment: BeamTreatment = BeamTreatment.BOTH
    thirty_second_sub_treatment: BeamTreatment = BeamTreatment.RESTS_ONLY


@dataclass(frozen=True)
class TupletBeamRuleSet(_RuleSetMixin):
    """
    Beam split points and subdivision displays for one tuplet group.

    Attributes:
        simplify_brackets:    Hide the bracket where the beams already show the grouping.
        beam_across_boundary: Allow beams joining notes inside and outside the tuplet.
        beam_within_tuplet:   Whether the tuplet's own beaming is changed at all.
    """

    split_points_8: SplitPoints
    split_points_16: SplitPoints
    split_points_32: SplitPoints
    sub_display_8_in_16: SplitPoints
    sub_display_8_in_32: SplitPoints
    sub_display_16_in_32: SplitPoints
    beam_treatment: BeamTreatment = BeamTreatment.BOTH
    eighth_sub_treatment: BeamTreatment = BeamTreatment.BOTH
    sixteenth_sub_treatment: BeamTreatment = BeamTreatment.BOTH
    thirty_second_sub_treatment: BeamTreatment = BeamTreatment.BOTH
    simplify_brackets: bool = True
    # Not independently configurable yet.
    beam_across_boundary: bool = True
    beam_within_tuplet: bool = True

    def to_legacy_array(self) -> list[Any]:
        return super().to_legacy_array() + [
            self.simplify_brackets,
            self.beam_across_boundary,
            self.beam_within_tuplet,
        ]


@dataclass(frozen=True)
class CustomBeamRules:
    """
    Caller-supplied replacement sequences for a time signature.

    A field left as ``None`` keeps the derived sequence.
    """

    split_points_8: SplitPoints | None = None
    split_points_16: SplitPoints | None = None
    split_points_32: SplitPoints | None = None
    sub_display_8_in_16: SplitPoints | None = None
    sub_display_8_in_32: SplitPoints | None = None
    sub_display_16_in_32: SplitPoints | None = None

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> CustomBeamRules:
        """
        Build overrides from a plain mapping of sequence name to values.

        Raises:
            ValueError: If a key is not a known sequence name or a value is
                not a list of numbers.
        """
        unknown = sorted(set(data) - set(SEQUENCE_FIELDS))
        if unknown:
            raise ValueError(
                f"Unknown beam rule sequence(s): {', '.join(unknown)}. "
                f"Use one of: {', '.join(SEQUENCE_FIELDS)}."
            )
        sequences: dict[str, SplitPoints] = {}
        for name, values in data.items():
            if not isinstance(values, (list, tuple)):
                raise ValueError(f"Sequence '{name}' must be a list of numbers, got {values!r}.")
            try:
                sequences[name] = as_split_points(values)
            except (TypeError, ValueError, OverflowError, ZeroDivisionError) as exc:
                raise ValueError(f"Sequence '{name}' holds a non-numeric value: {exc}") from exc
        return cls(**sequences)
