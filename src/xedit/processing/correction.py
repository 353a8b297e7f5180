import numpy as np
import xarray as xr

from xedit.core.config import ATTRS, DIMS
from xedit.core.spectrum import Spectrum
from xedit.core.utils import _check_dims


def _apply_correction_ndarray(
    fid: np.ndarray, t: np.ndarray, freq_hz: float, phase_deg: float
) -> np.ndarray:
    """Pure-NumPy frequency-shift and zero-order phase operator.

    Multiplies the time-domain samples by
    ``exp(1j * pi * (t * freq_hz * 2 + phase_deg / 180))``. A linear phase
    ramp in time moves the spectrum by ``+freq_hz``; the constant term
    rotates it by ``phase_deg``.

    ``pi * 2 * t * f`` is the ordinary ``2 * pi * f * t`` ramp. Keep the
    factorisation as written so corrections stay bit-identical to FID-A.
    """
    return fid * np.exp(1j * np.pi * (t * freq_hz * 2 + phase_deg / 180))


def apply_correction(
    da: xr.DataArray, freq_hz: float = 0.0, phase_deg: float = 0.0, dim: str = DIMS.time
) -> xr.DataArray:
    """
    Apply a combined frequency shift and phase rotation to a time-domain signal.

    Parameters
    ----------
    da : xr.DataArray
        The input time-domain FID. Extra dimensions are broadcast.
    freq_hz : float, optional
        Frequency shift in Hz, by default 0.0.
    phase_deg : float, optional
        Zero-order phase rotation in degrees, by default 0.0.
    dim : str, optional
        The time dimension carrying the time coordinate [s], by default `DIMS.time`.

    Returns
    -------
    xr.DataArray
        The corrected FID. The applied shifts are stored in the attributes
        (`frequency_shift`, `phase_shift`) to preserve lineage.
    """
    _check_dims(da, dim, "apply_correction")

    axis = da.get_axis_num(dim)
    shape = [1] * da.ndim
    shape[axis] = -1
    t = da.coords[dim].values.reshape(shape)

    corrected = da.copy(data=_apply_correction_ndarray(da.values, t, freq_hz, phase_deg))

    new_attrs = da.attrs.copy()
    new_attrs[ATTRS.frequency_shift] = float(freq_hz)
    new_attrs[ATTRS.phase_shift] = float(phase_deg)
    return corrected.assign_attrs(new_attrs)


def shift_and_phase(spectrum: Spectrum, freq_hz: float, phase_deg: float) -> Spectrum:
    """Return ``spectrum`` with :func:`apply_correction` applied to its FID."""
    return spectrum.with_fid(apply_correction(spectrum.fid, freq_hz, phase_deg))


def scale_amplitude(spectrum: Spectrum, factor: float) -> Spectrum:
    """Multiply the FID (and therefore the spectrum) by a scalar."""
    return spectrum.with_fid(spectrum.fid.values * factor)
