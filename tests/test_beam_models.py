"""Unit tests for rule-set models and treatment narrowing."""

import dataclasses

import pytest

from rebeamer.beam_models import BeamTreatment, CustomBeamRules, narrow_treatment
from rebeamer.timesig_rules import derive_time_signature_rules
from rebeamer.tuplet_rules import derive_tuplet_rules

B = BeamTreatment


@pytest.mark.parametrize(
    ("beam", "sub", "expected"),
    [
        (B.BOTH, B.BOTH, B.BOTH),
        (B.BOTH, B.RESTS_ONLY, B.RESTS_ONLY),
        (B.BOTH, B.NONE, B.NONE),
        (B.NOTES_ONLY, B.BOTH, B.NOTES_ONLY),
        (B.NOTES_ONLY, B.NOTES_ONLY, B.NOTES_ONLY),
        (B.NOTES_ONLY, B.RESTS_ONLY, B.NONE),
        (B.RESTS_ONLY, B.BOTH, B.RESTS_ONLY),
        (B.RESTS_ONLY, B.NOTES_ONLY, B.NONE),
        (B.RESTS_ONLY, B.RESTS_ONLY, B.RESTS_ONLY),
        (B.NONE, B.BOTH, B.NONE),
    ],
)
def test_narrow_treatment(beam: BeamTreatment, sub: BeamTreatment, expected: BeamTreatment) -> None:
    assert narrow_treatment(beam, sub) is expected


def test_treatment_codes_match_presets() -> None:
    assert [int(t) for t in BeamTreatment] == [0, 1, 2, 3]
    assert B.BOTH.applies_to_rests and B.BOTH.applies_to_notes
    assert not B.NONE.applies_to_rests


def test_narrowed_is_identity_when_beaming_everything() -> None:
    rules = derive_time_signature_rules(4, 4)
    assert rules.narrowed() == rules


def test_narrowed_clips_sub_treatments() -> None:
    rules = dataclasses.replace(derive_time_signature_rules(4, 4), beam_treatment=B.NOTES_ONLY)
    narrowed = rules.narrowed()
    assert narrowed.eighth_sub_treatment is B.NONE
    assert narrowed.sixteenth_sub_treatment is B.NOTES_ONLY
    assert narrowed.thirty_second_sub_treatment is B.NONE
    assert narrowed.split_points_8 == rules.split_points_8
    assert rules.sixteenth_sub_treatment is B.BOTH


def test_narrowed_keeps_tuplet_flags() -> None:
    rules = dataclasses.replace(derive_tuplet_rules(3, 0.5), beam_treatment=B.RESTS_ONLY)
    narrowed = rules.narrowed()
    assert narrowed.eighth_sub_treatment is B.RESTS_ONLY
    assert narrowed.simplify_brackets is True


def test_rule_sets_are_frozen() -> None:
    rules = derive_time_signature_rules(4, 4)
    with pytest.raises(dataclasses.FrozenInstanceError):
        rules.beam_treatment = B.NONE  # type: ignore[misc]


def test_to_dict_is_json_friendly() -> None:
    data = derive_time_signature_rules(7, 16).to_dict()
    assert data["split_points_8"] == [0, 3.5]
    assert data["beam_treatment"] == "BOTH"
    assert data["eighth_sub_treatment"] == "RESTS_ONLY"


def test_tuplet_to_dict_includes_flags() -> None:
    data = derive_tuplet_rules(3, 0.25).to_dict()
    assert data["simplify_brackets"] is True
    assert data["beam_within_tuplet"] is True


def test_legacy_array_layout() -> None:
    array = derive_time_signature_rules(4, 4).to_legacy_array()
    assert len(array) == 10
    assert array[0] == [0, 4, 8]
    assert array[6:] == [3, 1, 3, 1]


def test_tuplet_legacy_array_layout() -> None:
    array = derive_tuplet_rules(3, 0.5).to_legacy_array()
    assert len(array) == 13
    assert array[6:] == [3, 3, 3, 3, True, True, True]


def test_custom_rules_from_mapping() -> None:
    rules = CustomBeamRules.from_mapping({"split_points_8": [2, 4.0]})
    assert rules.split_points_8 == (2, 4)
    assert rules.split_points_16 is None


def test_custom_rules_rejects_unknown_sequence() -> None:
    with pytest.raises(ValueError, match="eighth_split"):
        CustomBeamRules.from_mapping({"eighth_split": [2]})


@pytest.mark.parametrize("values", [5, "2,4", None])
def test_custom_rules_rejects_non_list_sequence(values: object) -> None:
    with pytest.raises(ValueError, match="split_points_8"):
        CustomBeamRules.from_mapping({"split_points_8": values})


def test_custom_rules_rejects_non_numeric_element() -> None:
    with pytest.raises(ValueError, match="non-numeric"):
        CustomBeamRules.from_mapping({"split_points_8": [2, None]})
