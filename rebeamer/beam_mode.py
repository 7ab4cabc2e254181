"""Beam-mode conversion between MuseScore 3 and MuseScore 4 enumerations."""

from enum import IntEnum
from typing import Final


class LegacyBeamMode(IntEnum):
    """MuseScore 3 beam modes."""

    AUTO = 0
    BEGIN = 1
    MID = 2
    END = 3
    NO_BEAM = 4
    BEGIN32 = 5
    BEGIN64 = 6


class BeamMode(IntEnum):
    """MuseScore 4 beam modes."""

    AUTO = 0
    NO_BEAM = 1
    BEGIN = 2
    BEGIN16 = 3
    BEGIN32 = 4
    MID = 5  # join beams
    END = 6


BEAM_MODE_TABLE: Final[dict[LegacyBeamMode, BeamMode]] = {
    LegacyBeamMode.AUTO: BeamMode.AUTO,
    LegacyBeamMode.BEGIN: BeamMode.BEGIN,
    LegacyBeamMode.MID: BeamMode.MID,
    LegacyBeamMode.END: BeamMode.END,
    LegacyBeamMode.NO_BEAM: BeamMode.NO_BEAM,
    LegacyBeamMode.BEGIN32: BeamMode.BEGIN16,
    LegacyBeamMode.BEGIN64: BeamMode.BEGIN32,
}


def convert_beam_mode(legacy_mode: int) -> int:
    """
    Convert a MuseScore 3 beam mode value to its MuseScore 4 equivalent.

    Never fails: any value outside the legacy enumeration maps to AUTO (0).
    """
    try:
        mode = LegacyBeamMode(legacy_mode)
    except ValueError:
        return int(BeamMode.AUTO)
    return int(BEAM_MODE_TABLE[mode])
