"""Shared synthetic acquisitions for the xedit test suite."""

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")

from xedit.core.spectrum import Spectrum  # noqa: E402
from xedit.processing.correction import shift_and_phase  # noqa: E402
from xedit.processing.subspectra import merge_subspectra  # noqa: E402
from xedit.simulation import simulate_spectrum  # noqa: E402

# NAA, Cr (CH3), Cho, Cr (CH2)
PEAK_PPM = [2.01, 3.03, 3.21, 3.92]
PEAK_AMPS = [1.0, 0.8, 0.6, 0.5]

N_POINTS = 2048
SPECTRAL_WIDTH = 2000.0
REFERENCE_FREQUENCY = 127.8
CARRIER_PPM = 4.65


def make_spectrum(amplitudes=PEAK_AMPS, chemical_shifts=PEAK_PPM, **kwargs) -> Spectrum:
    """Noiseless single sub-spectrum on the shared acquisition grid."""
    params = {
        "reference_frequency": REFERENCE_FREQUENCY,
        "carrier_ppm": CARRIER_PPM,
        "spectral_width": SPECTRAL_WIDTH,
        "n_points": N_POINTS,
        "dampings": 15.0,
    }
    params.update(kwargs)
    return simulate_spectrum(amplitudes, chemical_shifts, **params)


@pytest.fixture
def spec_a() -> Spectrum:
    """The reference sub-spectrum A."""
    return make_spectrum()


@pytest.fixture
def spec_c() -> Spectrum:
    """A sub-spectrum whose content differs from A (extra 3.0 ppm resonance, no NAA)."""
    return make_spectrum(
        amplitudes=[0.2, 0.8, 0.6, 0.5, 0.9],
        chemical_shifts=[2.01, 3.03, 3.21, 3.92, 3.0],
    )


@pytest.fixture
def mega_packed(spec_a) -> Spectrum:
    """Packed MEGA acquisition: B is A shifted by +2.5 Hz and rotated by +8 degrees."""
    spec_b = shift_and_phase(spec_a, 2.5, 8.0)
    return merge_subspectra(spec_a, spec_b)


@pytest.fixture
def hermes_set(spec_a, spec_c) -> list[Spectrum]:
    """Four sub-spectra where B and C drift relative to A, and D relative to C."""
    spec_b = shift_and_phase(spec_a, -1.5, 5.0)
    spec_c_drifted = shift_and_phase(spec_c, 2.0, -6.0)
    spec_d = shift_and_phase(spec_c, 1.0, 4.0)
    return [spec_a, spec_b, spec_c_drifted, spec_d]
