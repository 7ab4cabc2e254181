"""Beaming rules derived from a measure's time signature."""

from __future__ import annotations

import logging
import math
from fractions import Fraction
from typing import Any, Final, Iterable

from rebeamer.beam_models import (
    SEQUENCE_FIELDS,
    BeamRuleSet,
    BeamTreatment,
    CustomBeamRules,
    SplitPoints,
    as_split_points,
)
from rebeamer.errors import UnrecognizedTimeSignatureError

logger = logging.getLogger(__name__)

SUPPORTED_DENOMINATORS: Final[tuple[int, ...]] = (1, 2, 4, 8, 16, 32, 64)

# Units per whole note for each sequence, in SEQUENCE_FIELDS order.
UNITS_PER_WHOLE: Final[dict[str, int]] = {
    "split_points_8": 8,
    "split_points_16": 16,
    "split_points_32": 32,
    "sub_display_8_in_16": 16,
    "sub_display_8_in_32": 32,
    "sub_display_16_in_32": 32,
}


def enumerate_points(step: Any, bound: Any) -> list[Any]:
    """Return ``step * i`` for every integer ``i`` from 0 up to and including ``bound``."""
    return [step * i for i in range(math.floor(bound) + 1)]


def _whole_and_half_rules(numerator: int, denominator: int) -> dict[str, list[Any]]:
    # X/1 has twice as many quarters per measure as X/2.
    quarters = numerator * (2 if denominator == 1 else 1)
    return {
        "split_points_8": enumerate_points(4, quarters),
        "split_points_16": enumerate_points(4, quarters * 2),
        "split_points_32": enumerate_points(8, quarters * 2),
        "sub_display_8_in_16": enumerate_points(2, quarters * 4),
        "sub_display_8_in_32": enumerate_points(4, quarters * 4),
        "sub_display_16_in_32": enumerate_points(2, quarters * 8),
    }


def _quarter_eighth_splits(numerator: int, score_numerators: frozenset[int]) -> list[Any]:
    if numerator == 4:
        return [0, 4, 8]
    if numerator == 5:
        # 3+2: the last two beats stay joined
        return [0, 2, 4, 6, 10]
    if numerator == 6 and 4 in score_numerators:
        # beam like 3/2 when the score also has 4/4
        return [0, 4, 8, 12]
    return enumerate_points(2, numerator)


def _quarter_rules(numerator: int, score_numerators: frozenset[int]) -> dict[str, list[Any]]:
    return {
        "split_points_8": _quarter_eighth_splits(numerator, score_numerators),
        "split_points_16": enumerate_points(4, numerator),
        "split_points_32": enumerate_points(8, numerator),
        "sub_display_8_in_16": enumerate_points(2, numerator * 2),
        "sub_display_8_in_32": enumerate_points(4, numerator * 2),
        "sub_display_16_in_32": enumerate_points(2, numerator * 4),
    }


def _eighth_rules(numerator: int, denominator: int) -> dict[str, list[Any]]:
    if numerator % 3 == 0:
        # Group count comes from the denominator, not the numerator.
        groups = Fraction(denominator, 3)
        return {
            "split_points_8": enumerate_points(3, groups),
            "split_points_16": enumerate_points(6, groups),
            "split_points_32": enumerate_points(12, groups),
            "sub_display_8_in_16": enumerate_points(2, denominator),
            "sub_display_8_in_32": enumerate_points(4, denominator),
            "sub_display_16_in_32": enumerate_points(2, denominator * 2),
        }
    return {
        "split_points_8": enumerate_points(1, numerator),
        "split_points_16": enumerate_points(2, numerator),
        "split_points_32": enumerate_points(4, numerator),
        "sub_display_8_in_16": enumerate_points(1, numerator * 2),
        "sub_display_8_in_32": enumerate_points(2, numerator * 2),
        "sub_display_16_in_32": enumerate_points(1, numerator * 4),
    }


def _sixteenth_rules(numerator: int, denominator: int) -> dict[str, list[Any]]:
    eighths = [0, Fraction(numerator, 2)]
    if numerator % 3 == 0:
        groups = Fraction(denominator, 3)
        return {
            "split_points_8": eighths,
            "split_points_16": enumerate_points(3, groups),
            "split_points_32": enumerate_points(6, groups),
            "sub_display_8_in_16": enumerate_points(1, denominator),
            "sub_display_8_in_32": enumerate_points(2, denominator),
            "sub_display_16_in_32": enumerate_points(1, denominator * 2),
        }
    return {
        "split_points_8": eighths,
        "split_points_16": enumerate_points(1, numerator),
        "split_points_32": enumerate_points(2, numerator),
        "sub_display_8_in_16": enumerate_points(1, numerator * 2),
        "sub_display_8_in_32": enumerate_points(2, numerator * 2),
        "sub_display_16_in_32": enumerate_points(1, numerator * 4),
    }


def _thirty_second_rules(numerator: int, denominator: int) -> dict[str, list[Any]]:
    return {
        "split_points_8": [0, Fraction(numerator, 4)],
        "split_points_16": [0, Fraction(numerator, 2)],
        "split_points_32": [0, numerator],
        "sub_display_8_in_16": [0, Fraction(numerator, 2)],
        "sub_display_8_in_32": [0, numerator],
        "sub_display_16_in_32": enumerate_points(1, denominator),
    }


def _sixty_fourth_rules(numerator: int) -> dict[str, list[Any]]:
    half = Fraction(numerator, 2)
    return {
        "split_points_8": [0, Fraction(numerator, 8)],
        "split_points_16": [0, Fraction(numerator, 4)],
        "split_points_32": [0, half],
        "sub_display_8_in_16": [0, Fraction(numerator, 4)],
        "sub_display_8_in_32": [0, half],
        "sub_display_16_in_32": [0, half],
    }


def apply_custom_rules(
    sequences: dict[str, list[Any]],
    numerator: int,
    denominator: int,
    overrides: CustomBeamRules | None = None,
) -> dict[str, list[Any]]:
    """
    Replace derived sequences with overrides and pin the measure boundaries.

    Every sequence gets ``0`` in front and the measure length (in that
    sequence's units) at the end, whatever the override contained.
    """
    result: dict[str, list[Any]] = {}
    for name in SEQUENCE_FIELDS:
        custom = getattr(overrides, name) if overrides is not None else None
        values = list(custom) if custom is not None else list(sequences[name])
        total = Fraction(numerator, denominator) * UNITS_PER_WHOLE[name]
        result[name] = [0, *values, total]
    return result


def derive_time_signature_rules(
    numerator: int,
    denominator: int,
    custom: bool = False,
    score_numerators: Iterable[int] = frozenset(),
    *,
    measure_index: int = 0,
    overrides: CustomBeamRules | None = None,
) -> BeamRuleSet:
    """
    Derive the beaming rules for a measure in ``numerator/denominator``.

    Args:
        numerator:        Beats per measure.
        denominator:      Beat unit; one of SUPPORTED_DENOMINATORS.
        custom:           Apply ``overrides`` and pin the measure boundaries.
        score_numerators: Every time-signature numerator in the host score.
                          Only consulted for 6/4, which beams like 3/2 when
                          the score also contains 4/4.
        measure_index:    0-based index of the measure, used in error reports.
        overrides:        Replacement sequences, only honoured when ``custom``.

    Returns:
        A fresh BeamRuleSet.

    Raises:
        UnrecognizedTimeSignatureError: If the denominator is unsupported.
    """
    snapshot = frozenset(score_numerators)
    eighth_sub_treatment = BeamTreatment.RESTS_ONLY

    if denominator in (1, 2):
        sequences = _whole_and_half_rules(numerator, denominator)
    elif denominator == 4:
        sequences = _quarter_rules(numerator, snapshot)
    elif denominator == 8:
        sequences = _eighth_rules(numerator, denominator)
        if numerator % 3 == 0:
            # compound meter: always show the eighth groups
            eighth_sub_treatment = BeamTreatment.BOTH
    elif denominator == 16:
        sequences = _sixteenth_rules(numerator, denominator)
    elif denominator == 32:
        sequences = _thirty_second_rules(numerator, denominator)
    elif denominator == 64:
        sequences = _sixty_fourth_rules(numerator)
    else:
        error = UnrecognizedTimeSignatureError(numerator, denominator, measure_index)
        logger.error("%s (%d/%d)", error, numerator, denominator)
        raise error

    logger.debug("Derived beaming rules for %d/%d at measure %d", numerator, denominator, measure_index + 1)

    if custom:
        sequences = apply_custom_rules(sequences, numerator, denominator, overrides)

    rule_fields: dict[str, SplitPoints] = {
        name: as_split_points(sequences[name]) for name in SEQUENCE_FIELDS
    }
    return BeamRuleSet(**rule_fields, eighth_sub_treatment=eighth_sub_treatment)
