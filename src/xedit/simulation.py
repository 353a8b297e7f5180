"""Synthetic single-voxel acquisitions for testing and documentation."""

import numpy as np
import xarray as xr
from numpy.typing import ArrayLike

from xedit.core.config import ATTRS, COORDS, DIMS
from xedit.core.spectrum import Spectrum
from xedit.core.utils import as_variable


def _simulate_fid_ndarray(
    amplitudes: ArrayLike,
    chemical_shifts: ArrayLike,
    *,
    reference_frequency: float,
    carrier_ppm: float,
    spectral_width: float,
    n_points: int,
    dampings: float | ArrayLike,
    phases: float | ArrayLike,
    lineshape_g: float | ArrayLike,
) -> np.ndarray:
    """Pure-NumPy sum of damped complex exponentials (Lorentzian to Gaussian)."""
    amplitudes = np.atleast_1d(np.asarray(amplitudes, dtype=float))
    chemical_shifts = np.atleast_1d(np.asarray(chemical_shifts, dtype=float))
    n_peaks = len(amplitudes)
    if len(chemical_shifts) != n_peaks:
        raise ValueError("Length of chemical_shifts must match amplitudes.")

    # Peaks sit relative to the carrier, which maps to 0 Hz
    freqs = (chemical_shifts - carrier_ppm) * reference_frequency
    dampings = np.broadcast_to(dampings, n_peaks)
    phases = np.deg2rad(np.broadcast_to(phases, n_peaks))
    g_arr = np.clip(np.broadcast_to(lineshape_g, n_peaks), 0.0, 1.0)

    t_col = (np.arange(n_points) / spectral_width)[:, np.newaxis]
    decay = np.exp(-dampings * (1 - g_arr + g_arr * t_col) * t_col)
    oscillation = np.exp(1j * 2 * np.pi * freqs * t_col)

    return np.sum(amplitudes * np.exp(1j * phases) * decay * oscillation, axis=1)


def simulate_fid(
    amplitudes: ArrayLike,
    chemical_shifts: ArrayLike,
    *,
    reference_frequency: float = 127.8,
    carrier_ppm: float = 4.65,
    spectral_width: float = 2000.0,
    n_points: int = 2048,
    dampings: float | ArrayLike = 15.0,
    phases: float | ArrayLike = 0.0,
    lineshape_g: float | ArrayLike = 0.0,
    target_snr: float | None = None,
    seed: int | None = None,
) -> xr.DataArray:
    """Simulate a complex Free Induction Decay as a sum of resonances.

    Parameters
    ----------
    amplitudes : ArrayLike
        Peak amplitudes.
    chemical_shifts : ArrayLike
        Peak positions in ppm.
    reference_frequency : float, optional
        Spectrometer frequency in MHz. Default is 127.8 (3 T proton).
    carrier_ppm : float, optional
        Chemical shift at 0 Hz. Default is 4.65 (water).
    spectral_width : float, optional
        Spectral width in Hz. Default is 2000.0.
    n_points : int, optional
        Number of time-domain samples. Default is 2048.
    dampings : float | ArrayLike, optional
        Exponential damping constant(s) in 1/s. Default is 15.0.
    phases : float | ArrayLike, optional
        Per-peak phase(s) in degrees. Default is 0.0.
    lineshape_g : float | ArrayLike, optional
        Lineshape parameter(s) between 0 (Lorentzian) and 1 (Gaussian).
    target_snr : float | None, optional
        If given, complex Gaussian white noise is added so that the mean
        magnitude of the first 10 samples over the total noise standard
        deviation equals this value.
    seed : int | None, optional
        Seed for the noise generator, for reproducible noisy data.

    Returns
    -------
    xarray.DataArray
        1D complex FID along `DIMS.time`, carrying `reference_frequency` and
        `carrier_ppm` so it can be wrapped in a :class:`~xedit.core.Spectrum`.
    """
    fid_data = _simulate_fid_ndarray(
        amplitudes,
        chemical_shifts,
        reference_frequency=reference_frequency,
        carrier_ppm=carrier_ppm,
        spectral_width=spectral_width,
        n_points=n_points,
        dampings=dampings,
        phases=phases,
        lineshape_g=lineshape_g,
    )

    if target_snr is not None:
        signal_p = np.mean(np.abs(fid_data[0 : min(10, n_points)]))
        # Split the variance equally between the quadrature channels
        noise_std_channel = signal_p / target_snr / np.sqrt(2)
        rng = np.random.default_rng(seed)
        fid_data = fid_data + (
            rng.normal(0, noise_std_channel, fid_data.shape)
            + 1j * rng.normal(0, noise_std_channel, fid_data.shape)
        )

    attrs = {
        ATTRS.reference_frequency: reference_frequency,
        ATTRS.carrier_ppm: carrier_ppm,
        ATTRS.coil_combined: True,
        ATTRS.averaged: True,
        "sim_amplitudes": np.atleast_1d(amplitudes).tolist(),
        "sim_chemical_shifts_ppm": np.atleast_1d(chemical_shifts).tolist(),
    }
    if target_snr is not None:
        attrs["target_snr"] = target_snr

    t = np.arange(n_points) / spectral_width
    return xr.DataArray(
        data=fid_data,
        dims=[DIMS.time],
        coords={COORDS.time: as_variable(COORDS.time, DIMS.time, t)},
        attrs=attrs,
        name="FID Signal",
    )


def simulate_spectrum(amplitudes: ArrayLike, chemical_shifts: ArrayLike, **kwargs) -> Spectrum:
    """Like :func:`simulate_fid`, wrapped as a single-sub-spectrum :class:`Spectrum`."""
    return Spectrum(simulate_fid(amplitudes, chemical_shifts, **kwargs))
