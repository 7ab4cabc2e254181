"""Beaming rules derived from a tuplet's size and unit duration."""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Any, Final, Union

from rebeamer.beam_models import SEQUENCE_FIELDS, TupletBeamRuleSet, as_split_points
from rebeamer.timesig_rules import enumerate_points

logger = logging.getLogger(__name__)

# Unit durations in quarter lengths (0.5 = eighth note).
EIGHTH: Final[Fraction] = Fraction(1, 2)
SIXTEENTH: Final[Fraction] = Fraction(1, 4)
THIRTY_SECOND: Final[Fraction] = Fraction(1, 8)
SIXTY_FOURTH: Final[Fraction] = Fraction(1, 16)

Duration = Union[int, float, Fraction]


def _long_unit_rules(count: int, unit: Fraction) -> dict[str, list[Any]]:
    # Eighth units and longer: one split per quarter-note equivalent.
    span = count * unit
    return {
        "split_points_8": enumerate_points(4, span * 2),
        "split_points_16": enumerate_points(4, span * 4),
        "split_points_32": enumerate_points(8, span * 4),
        "sub_display_8_in_16": enumerate_points(2, span * 8),
        "sub_display_8_in_32": enumerate_points(4, span * 8),
        "sub_display_16_in_32": enumerate_points(2, span * 16),
    }


def _sixteenth_unit_rules(count: int) -> dict[str, list[Any]]:
    return {
        "split_points_8": enumerate_points(2, count),
        "split_points_16": enumerate_points(4, count),
        "split_points_32": enumerate_points(8, count),
        "sub_display_8_in_16": enumerate_points(2, count * 2),
        "sub_display_8_in_32": enumerate_points(4, count * 2),
        "sub_display_16_in_32": enumerate_points(2, count * 4),
    }


def _thirty_second_unit_rules(count: int) -> dict[str, list[Any]]:
    return {
        "split_points_8": [0, count],
        "split_points_16": [0, count * 2],
        "split_points_32": [0, count * 4],
        "sub_display_8_in_16": enumerate_points(2, count),
        "sub_display_8_in_32": enumerate_points(4, count),
        "sub_display_16_in_32": enumerate_points(1, count * 2),
    }


def _sixty_fourth_unit_rules(count: int) -> dict[str, list[Any]]:
    return {
        "split_points_8": [0, Fraction(count, 2)],
        "split_points_16": [0, count],
        "split_points_32": [0, count * 2],
        "sub_display_8_in_16": [0, count],
        "sub_display_8_in_32": [0, count * 2],
        "sub_display_16_in_32": enumerate_points(1, count),
    }


def _boundary_rules(count: int, unit: Fraction) -> dict[str, list[Any]]:
    span = count * unit
    return {
        "split_points_8": [0, span * 8],
        "split_points_16": [0, span * 16],
        "split_points_32": [0, span * 32],
        "sub_display_8_in_16": [0, span * 16],
        "sub_display_8_in_32": [0, span * 32],
        "sub_display_16_in_32": [0, span * 32],
    }


def derive_tuplet_rules(tuplet_count: int, unit_duration: Duration) -> TupletBeamRuleSet:
    """
    Derive the beaming rules for one tuplet group.

    Args:
        tuplet_count:  Number of notes in the tuplet (3 for a triplet).
        unit_duration: Duration of one tuplet unit in quarter lengths
                       (0.5 for eighth-note tuplets, 0.25 for sixteenths).

    Returns:
        A fresh TupletBeamRuleSet with every treatment set to BOTH.

    Raises:
        ValueError: If either argument is not positive.
    """
    if tuplet_count <= 0:
        raise ValueError(f"Tuplet count must be positive, got {tuplet_count}.")
    unit = Fraction(unit_duration)
    if unit <= 0:
        raise ValueError(f"Tuplet unit duration must be positive, got {unit_duration}.")

    if unit >= EIGHTH:
        sequences = _long_unit_rules(tuplet_count, unit)
    elif unit == SIXTEENTH:
        sequences = _sixteenth_unit_rules(tuplet_count)
    elif unit == THIRTY_SECOND:
        sequences = _thirty_second_unit_rules(tuplet_count)
    elif unit == SIXTY_FOURTH:
        sequences = _sixty_fourth_unit_rules(tuplet_count)
    else:
        sequences = _boundary_rules(tuplet_count, unit)

    logger.debug("Derived tuplet beaming rules for %d x %s", tuplet_count, unit)
    return TupletBeamRuleSet(
        **{name: as_split_points(sequences[name]) for name in SEQUENCE_FIELDS}
    )
