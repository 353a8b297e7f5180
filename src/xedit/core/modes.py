"""Editing schemes and their fixed sub-spectrum correction order."""

from enum import Enum
from typing import NamedTuple


class CorrectionStep(NamedTuple):
    """Align sub-spectrum ``target`` onto the (already corrected) ``reference``."""

    target: int
    reference: int


class EditingMode(str, Enum):
    """Spectral editing scheme of a multi-sub-spectrum acquisition.

    Each member carries a fixed sub-spectrum count, labels, the order in
    which pairwise corrections are applied and the sum/difference weights of
    the combined spectra. Strings are matched case-insensitively, so
    ``EditingMode("hermes") is EditingMode.HERMES``.
    """

    MEGA = "MEGA"
    HERMES = "HERMES"
    HERCULES = "HERCULES"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.upper():
                    return member
        return None

    @property
    def n_subspectra(self) -> int:
        return len(self.labels)

    @property
    def labels(self) -> tuple[str, ...]:
        return _LABELS[self]

    @property
    def correction_order(self) -> tuple[CorrectionStep, ...]:
        """Pairwise steps, executed in order; references point at corrected data.

        For the four-way schemes D is referenced against the already corrected
        C, not A: C and D share one editing-condition pairing distinct from
        A/B.
        """
        return _CORRECTION_ORDER[self]

    @property
    def combinations(self) -> dict[str, tuple[float, ...]]:
        """Weights over the sub-spectra (in label order) for sum/difference spectra."""
        return _COMBINATIONS[self]


_LABELS = {
    EditingMode.MEGA: ("A", "B"),
    EditingMode.HERMES: ("A", "B", "C", "D"),
    EditingMode.HERCULES: ("A", "B", "C", "D"),
}

_FOUR_WAY_ORDER = (
    CorrectionStep(target=1, reference=0),
    CorrectionStep(target=2, reference=0),
    CorrectionStep(target=3, reference=2),
)

_CORRECTION_ORDER = {
    EditingMode.MEGA: (CorrectionStep(target=1, reference=0),),
    EditingMode.HERMES: _FOUR_WAY_ORDER,
    EditingMode.HERCULES: _FOUR_WAY_ORDER,
}

_FOUR_WAY_COMBINATIONS = {
    "sum": (1.0, 1.0, 1.0, 1.0),
    "diff1": (1.0, 1.0, -1.0, -1.0),
    "diff2": (1.0, -1.0, 1.0, -1.0),
}

_COMBINATIONS = {
    EditingMode.MEGA: {"sum": (1.0, 1.0), "diff1": (1.0, -1.0)},
    EditingMode.HERMES: _FOUR_WAY_COMBINATIONS,
    EditingMode.HERCULES: _FOUR_WAY_COMBINATIONS,
}
