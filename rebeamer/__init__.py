"""rebeamer: beaming rules for time signatures, tuplets and beam modes."""

from rebeamer.beam_mode import BeamMode, LegacyBeamMode, convert_beam_mode
from rebeamer.beam_models import (
    BeamRuleSet,
    BeamTreatment,
    CustomBeamRules,
    TupletBeamRuleSet,
    narrow_treatment,
)
from rebeamer.errors import RebeamerError, UnrecognizedTimeSignatureError
from rebeamer.timesig_rules import derive_time_signature_rules
from rebeamer.tuplet_rules import derive_tuplet_rules

__version__ = "1.0.0"

__all__ = [
    "BeamMode",
    "BeamRuleSet",
    "BeamTreatment",
    "CustomBeamRules",
    "LegacyBeamMode",
    "RebeamerError",
    "TupletBeamRuleSet",
    "UnrecognizedTimeSignatureError",
    "__version__",
    "convert_beam_mode",
    "derive_time_signature_rules",
    "derive_tuplet_rules",
    "narrow_treatment",
]
