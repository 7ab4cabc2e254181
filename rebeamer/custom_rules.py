"""Loading user-defined beaming overrides from JSON files."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from rebeamer.beam_models import CustomBeamRules

logger = logging.getLogger(__name__)

TIME_SIGNATURE_PATTERN = re.compile(r"^\s*(\d+)\s*/\s*(\d+)\s*$")


def _parse_key(key: str) -> tuple[int, int]:
    match = TIME_SIGNATURE_PATTERN.match(key)
    if not match:
        raise ValueError(f"Invalid time signature key '{key}'. Expected e.g. '7/8'.")
    return int(match.group(1)), int(match.group(2))


def custom_rules_from_dict(data: Any) -> dict[tuple[int, int], CustomBeamRules]:
    """
    Build overrides from a document of the form::

        {"rules": {"7/8": {"split_points_8": [2, 4]}}}

    Raises:
        ValueError: If the document is malformed.
    """
    if not isinstance(data, dict):
        raise ValueError("Custom rules document must be a JSON object.")
    entries = data.get("rules")
    if not isinstance(entries, dict):
        raise ValueError("Custom rules document needs a 'rules' object.")

    rules: dict[tuple[int, int], CustomBeamRules] = {}
    for key, sequences in entries.items():
        if not isinstance(sequences, dict):
            raise ValueError(f"Rules for '{key}' must be an object of sequences.")
        rules[_parse_key(key)] = CustomBeamRules.from_mapping(sequences)
    return rules


def load_custom_rules(path: str | Path) -> dict[tuple[int, int], CustomBeamRules]:
    """
    Load overrides keyed by ``(numerator, denominator)`` from a JSON file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or is malformed.
    """
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    rules = custom_rules_from_dict(data)
    logger.info("Loaded custom beaming rules for %d time signature(s) from %s", len(rules), path)
    return rules


def custom_rules_for(
    rules: dict[tuple[int, int], CustomBeamRules],
    numerator: int,
    denominator: int,
) -> CustomBeamRules | None:
    return rules.get((numerator, denominator))
