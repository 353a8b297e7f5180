"""L1 spectral-difference objective for sub-spectrum alignment."""

import numpy as np

from xedit.core.spectrum import Spectrum
from xedit.processing.correction import _apply_correction_ndarray
from xedit.processing.fourier import _to_spectrum_ndarray


def frequency_mask(ppm: np.ndarray, ppm_range: tuple[float, float]) -> np.ndarray:
    """Boolean selection of ``ppm`` inside the closed interval ``ppm_range``."""
    low, high = ppm_range
    ppm = np.asarray(ppm)
    return (ppm >= low) & (ppm <= high)


def normalization_factor(reference: Spectrum, target: Spectrum) -> float:
    """Largest absolute real part across both spectra.

    Dividing both signals by this value makes the objective scale independent
    of the absolute signal intensity.
    """
    ref_max = np.max(np.abs(np.real(reference.specs.values)))
    tgt_max = np.max(np.abs(np.real(target.specs.values)))
    return float(max(ref_max, tgt_max))


def alignment_objective(
    reference_spectrum: np.ndarray,
    target_fid: np.ndarray,
    t: np.ndarray,
    mask: np.ndarray,
    x,
) -> float:
    """
    Sum of absolute real-part differences inside ``mask`` after correcting the target.

    Parameters
    ----------
    reference_spectrum : np.ndarray
        Centred reference spectrum (already transformed), amplitude-normalised.
    target_fid : np.ndarray
        Time-domain target, amplitude-normalised with the same factor.
    t : np.ndarray
        Time axis [s] shared by both signals.
    mask : np.ndarray
        Boolean frequency selection, aligned with the spectrum axis.
    x : sequence of float
        Candidate correction ``(freq_hz, phase_deg)``.

    Returns
    -------
    float
        The L1 norm of the masked residual.
    """
    freq_hz, phase_deg = x
    corrected = _to_spectrum_ndarray(_apply_correction_ndarray(target_fid, t, freq_hz, phase_deg))
    residual = np.real(reference_spectrum[mask]) - np.real(corrected[mask])
    return float(np.sum(np.abs(residual)))
