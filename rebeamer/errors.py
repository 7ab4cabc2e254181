"""Exceptions raised by rebeamer."""


class RebeamerError(Exception):
    """Base class for rebeamer errors."""


class UnrecognizedTimeSignatureError(RebeamerError, ValueError):
    """
    A time signature has a denominator no beaming rules exist for.

    Fatal for the measure traversal: no partial rule set is produced and the
    caller is expected to stop processing.

    Attributes:
        numerator:     Time-signature numerator.
        denominator:   The unsupported denominator.
        measure_index: 0-based index of the offending measure.
    """

    def __init__(self, numerator: int, denominator: int, measure_index: int = 0) -> None:
        self.numerator = numerator
        self.denominator = denominator
        self.measure_index = measure_index
        super().__init__(f"Unrecognised time signature at measure {self.measure_number}")

    @property
    def measure_number(self) -> int:
        """1-based measure number, as shown to users."""
        return self.measure_index + 1
