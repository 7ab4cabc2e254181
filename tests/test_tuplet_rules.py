"""Unit tests for tuplet beaming rules."""

from fractions import Fraction

import pytest

from rebeamer.beam_models import BeamTreatment
from rebeamer.tuplet_rules import derive_tuplet_rules


def test_eighth_triplet_splits_every_quarter_equivalent() -> None:
    rules = derive_tuplet_rules(3, 0.5)
    assert rules.split_points_8 == (0, 4, 8, 12)
    assert rules.split_points_16 == tuple(range(0, 25, 4))
    assert rules.split_points_32 == tuple(range(0, 49, 8))


def test_long_unit_sub_displays_are_not_repeated() -> None:
    rules = derive_tuplet_rules(3, 0.5)
    assert rules.sub_display_8_in_16 == tuple(range(0, 25, 2))
    assert rules.sub_display_8_in_32 == tuple(range(0, 49, 4))
    assert rules.sub_display_16_in_32 == tuple(range(0, 49, 2))
    assert list(rules.sub_display_8_in_16) == sorted(rules.sub_display_8_in_16)


def test_quarter_triplet_scales_with_unit() -> None:
    rules = derive_tuplet_rules(3, 1)
    assert rules.split_points_8 == tuple(range(0, 25, 4))


def test_float_and_fraction_units_agree() -> None:
    assert derive_tuplet_rules(3, 0.5) == derive_tuplet_rules(3, Fraction(1, 2))


def test_sixteenth_quintuplet_splits_every_member() -> None:
    rules = derive_tuplet_rules(5, 0.25)
    assert rules.split_points_8 == (0, 2, 4, 6, 8, 10)
    assert rules.split_points_16 == tuple(range(0, 21, 4))
    assert rules.split_points_32 == tuple(range(0, 41, 8))
    assert rules.sub_display_8_in_16 == tuple(range(0, 21, 2))
    assert rules.sub_display_16_in_32 == tuple(range(0, 41, 2))


def test_thirty_second_unit_collapses_split_points() -> None:
    rules = derive_tuplet_rules(3, 0.125)
    assert rules.split_points_8 == (0, 3)
    assert rules.split_points_16 == (0, 6)
    assert rules.split_points_32 == (0, 12)
    assert rules.sub_display_8_in_16 == (0, 2, 4, 6)
    assert rules.sub_display_8_in_32 == (0, 4, 8, 12)
    assert rules.sub_display_16_in_32 == tuple(range(7))


def test_sixty_fourth_unit_collapses_one_level_deeper() -> None:
    rules = derive_tuplet_rules(3, 0.0625)
    assert rules.split_points_8 == (0, Fraction(3, 2))
    assert rules.split_points_16 == (0, 3)
    assert rules.split_points_32 == (0, 6)
    assert rules.sub_display_8_in_16 == (0, 3)
    assert rules.sub_display_8_in_32 == (0, 6)
    assert rules.sub_display_16_in_32 == (0, 1, 2, 3)


def test_smaller_units_collapse_to_boundaries() -> None:
    rules = derive_tuplet_rules(3, Fraction(1, 32))
    assert rules.split_points_8 == (0, Fraction(3, 4))
    assert rules.split_points_16 == (0, Fraction(3, 2))
    assert rules.split_points_32 == (0, 3)
    assert rules.sub_display_16_in_32 == (0, 3)


def test_irregular_short_unit_uses_boundaries() -> None:
    rules = derive_tuplet_rules(3, Fraction(1, 3))
    assert rules.split_points_8 == (0, 8)
    assert rules.split_points_16 == (0, 16)
    assert rules.split_points_32 == (0, 32)


def test_defaults_are_fully_permissive() -> None:
    rules = derive_tuplet_rules(3, 0.5)
    assert rules.beam_treatment is BeamTreatment.BOTH
    assert rules.eighth_sub_treatment is BeamTreatment.BOTH
    assert rules.sixteenth_sub_treatment is BeamTreatment.BOTH
    assert rules.thirty_second_sub_treatment is BeamTreatment.BOTH
    assert rules.simplify_brackets is True
    assert rules.beam_across_boundary is True
    assert rules.beam_within_tuplet is True


@pytest.mark.parametrize(("count", "unit"), [(0, 0.5), (-3, 0.5), (3, 0), (3, -0.25)])
def test_non_positive_arguments_are_rejected(count: int, unit: float) -> None:
    with pytest.raises(ValueError):
        derive_tuplet_rules(count, unit)
