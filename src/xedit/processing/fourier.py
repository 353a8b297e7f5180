import numpy as np
import xarray as xr

from xedit.core.config import COORDS, DIMS, XeditTerm
from xedit.core.utils import _check_dims, as_variable

# Unnormalised forward transform, matching the FID-A `fftshift(fft(fids))`
# convention used for edited MRS.
FFT_NORM = "backward"


# --- 1. Pure-NumPy kernels (used inside the optimiser loop) ---


def _to_spectrum_ndarray(fid: np.ndarray, axis: int = -1) -> np.ndarray:
    """Centred spectrum of a time-domain array: ``fftshift(fft(fid))``."""
    return np.fft.fftshift(np.fft.fft(fid, axis=axis, norm=FFT_NORM), axes=axis)


def _to_fid_ndarray(spec: np.ndarray, axis: int = -1) -> np.ndarray:
    """Exact inverse of :func:`_to_spectrum_ndarray`."""
    return np.fft.ifft(np.fft.ifftshift(spec, axes=axis), axis=axis, norm=FFT_NORM)


# --- 2. Shifting Utilities ---


def fftshift(da: xr.DataArray, dim: str) -> xr.DataArray:
    """
    Apply fftshift by rolling data and coordinates along ``dim``.

    This shifts the zero-frequency component to the center of the spectrum.

    Parameters
    ----------
    da : xr.DataArray
        The input xarray DataArray.
    dim : str
        The dimension along which to apply the shift.

    Returns
    -------
    xr.DataArray
        A new DataArray with the data and coordinates rolled.
    """
    _check_dims(da, dim, "fftshift")
    return da.roll({dim: da.sizes[dim] // 2}, roll_coords=True)


def ifftshift(da: xr.DataArray, dim: str) -> xr.DataArray:
    """
    Apply ifftshift by rolling data and coordinates along ``dim``.

    The exact inverse of `fftshift`.
    """
    _check_dims(da, dim, "ifftshift")
    return da.roll({dim: (da.sizes[dim] + 1) // 2}, roll_coords=True)


# --- 3. Coordinate Math ---


def _convert_fft_coords(
    da: xr.DataArray, dim: str, out_dim: str, term: XeditTerm | None = None
) -> xr.DataArray:
    """
    Assign unshifted reciprocal coordinates to a transformed dimension.

    Computes the discrete Fourier transform sample frequencies (or time
    periods) from the spacing of the original coordinate, renames the
    dimension and injects units from ``term`` when given.
    """
    n_points = da.sizes[dim]
    old_coords = da.coords[dim].values if dim in da.coords else np.arange(n_points)

    delta = (old_coords[1] - old_coords[0]) if len(old_coords) > 1 else 1.0
    new_coords = np.fft.fftfreq(n_points, d=delta)

    if term is not None:
        new_var = as_variable(term, out_dim, new_coords)
    else:
        new_var = xr.Variable(out_dim, new_coords)

    if out_dim != dim:
        da = da.drop_vars(dim, errors="ignore").rename({dim: out_dim})

    return da.assign_coords({out_dim: new_var})


# --- 4. Pure Transforms ---


def fft(
    da: xr.DataArray, dim: str = DIMS.time, out_dim: str | None = None
) -> xr.DataArray:
    """
    Perform an unshifted Fast Fourier Transform along one dimension.

    Metadata and unaffected dimensions are strictly preserved.

    Parameters
    ----------
    da : xr.DataArray
        The input time-domain DataArray.
    dim : str, optional
        The dimension to transform. Defaults to `DIMS.time`.
    out_dim : str, optional
        The resulting dimension name. If None, the original name is retained.

    Returns
    -------
    xr.DataArray
        The frequency-domain DataArray with updated reciprocal coordinates.
    """
    _check_dims(da, dim, "fft")
    out_dim = out_dim or dim

    arr_fft = np.fft.fft(da.values, axis=da.get_axis_num(dim), norm=FFT_NORM)
    da_transformed = da.copy(data=arr_fft)

    term = COORDS.frequency if (dim == DIMS.time and out_dim == DIMS.frequency) else None
    return _convert_fft_coords(da_transformed, dim=dim, out_dim=out_dim, term=term)


def ifft(
    da: xr.DataArray, dim: str = DIMS.frequency, out_dim: str | None = None
) -> xr.DataArray:
    """
    Perform an unshifted Inverse Fast Fourier Transform along one dimension.

    Parameters
    ----------
    da : xr.DataArray
        The input frequency-domain DataArray.
    dim : str, optional
        The dimension to transform. Defaults to `DIMS.frequency`.
    out_dim : str, optional
        The resulting dimension name. If None, the original name is retained.

    Returns
    -------
    xr.DataArray
        The time-domain DataArray with updated reciprocal coordinates.
    """
    _check_dims(da, dim, "ifft")
    out_dim = out_dim or dim

    arr_ifft = np.fft.ifft(da.values, axis=da.get_axis_num(dim), norm=FFT_NORM)
    da_transformed = da.copy(data=arr_ifft)

    term = COORDS.time if (dim == DIMS.frequency and out_dim == DIMS.time) else None
    return _convert_fft_coords(da_transformed, dim=dim, out_dim=out_dim, term=term)


# --- 5. FID <-> Spectrum ---


def to_spectrum(
    da: xr.DataArray, dim: str = DIMS.time, out_dim: str = DIMS.frequency
) -> xr.DataArray:
    """
    Convert a time-domain Free Induction Decay (FID) to a centred spectrum.

    Applies the FFT along the time dimension and shifts the zero-frequency
    component to the center, so index 0 holds the most negative frequency
    offset.

    Parameters
    ----------
    da : xr.DataArray
        The input time-domain FID data.
    dim : str, optional
        The time dimension to transform, by default `DIMS.time`.
    out_dim : str, optional
        The name of the resulting frequency dimension, by default `DIMS.frequency`.

    Returns
    -------
    xr.DataArray
        The frequency-domain spectrum with centred frequency coordinates [Hz].
    """
    _check_dims(da, dim, "to_spectrum")

    da_freq = fft(da, dim=dim, out_dim=out_dim)
    return fftshift(da_freq, dim=out_dim)


def to_fid(
    da: xr.DataArray, dim: str = DIMS.frequency, out_dim: str = DIMS.time
) -> xr.DataArray:
    """
    Convert a centred spectrum back to a time-domain FID.

    The exact inverse of :func:`to_spectrum`. The time coordinate is rebuilt
    as strictly positive samples ``[0, T_acq)`` spaced by the dwell time.

    Parameters
    ----------
    da : xr.DataArray
        The input frequency-domain spectrum.
    dim : str, optional
        The frequency dimension to transform, by default `DIMS.frequency`.
    out_dim : str, optional
        The name of the resulting time dimension, by default `DIMS.time`.

    Returns
    -------
    xr.DataArray
        The time-domain FID data.
    """
    _check_dims(da, dim, "to_fid")

    # Drop derived frequency-axis coordinates (e.g. chemical_shift)
    derived = [c for c in da.coords if c != dim and da.coords[c].dims == (dim,)]
    da_unshifted = ifftshift(da.drop_vars(derived), dim=dim)
    da_fid = ifft(da_unshifted, dim=dim, out_dim=out_dim)

    n_points = da.sizes[dim]
    if dim in da.coords and n_points > 1:
        freqs = da.coords[dim].values
        # Spectral width SW = 1/dt = n_points * df
        df = abs(freqs[1] - freqs[0])
        dt = 1.0 / (n_points * df)
        da_fid = da_fid.assign_coords(
            {out_dim: as_variable(COORDS.time, out_dim, np.arange(n_points) * dt)}
        )

    return da_fid
