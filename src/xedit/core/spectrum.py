"""
Immutable value type bundling an edited-MRS acquisition.

A :class:`Spectrum` owns exactly one thing: the complex time-domain signal as
an ``xr.DataArray`` with its time axis and acquisition metadata. Everything
else (the centred spectrum, the ppm axis, sample counts) is derived from it,
so the frequency-domain view can never drift out of sync with the FID.
"""

import dataclasses
from functools import cached_property

import numpy as np
import xarray as xr

from xedit.core.config import ATTRS, COORDS, DIMS
from xedit.core.utils import _check_dims, as_variable, chemical_shift_axis
from xedit.core.validation import _check_attrs
from xedit.processing.fourier import to_spectrum

REQUIRED_ATTRS = (ATTRS.reference_frequency, ATTRS.carrier_ppm)


@dataclasses.dataclass(frozen=True, eq=False)
class Spectrum:
    """A coil-combined MRS acquisition, possibly holding packed sub-spectra.

    Parameters
    ----------
    fid : xr.DataArray
        Complex time-domain signal. Must contain `DIMS.time` with a uniformly
        spaced time coordinate in seconds, and the attributes
        ``reference_frequency`` and ``carrier_ppm``. Optional dimensions are
        `DIMS.subspectrum`, `DIMS.coil` and `DIMS.average`.

    Notes
    -----
    `specs` is computed lazily from `fid` and cached. Use :meth:`with_fid` to
    obtain a new instance with modified samples.
    """

    fid: xr.DataArray

    def __post_init__(self):
        da = self.fid
        if not isinstance(da, xr.DataArray):
            raise TypeError(f"Spectrum expects an xr.DataArray, got {type(da).__name__}.")
        _check_dims(da, DIMS.time, "Spectrum")
        _check_attrs(da, REQUIRED_ATTRS, "Spectrum")

        if da.sizes[DIMS.time] < 2:
            raise ValueError("Spectrum requires at least two time-domain samples.")
        if DIMS.time not in da.coords:
            raise ValueError(
                f"Spectrum requires a '{DIMS.time}' coordinate in seconds.\n\n"
                f"To fix this, assign one using standard xarray methods:\n"
                f"    >>> da = da.assign_coords({DIMS.time}=np.arange(n) / sw)"
            )
        if not np.issubdtype(da.dtype, np.number):
            raise ValueError(f"Spectrum requires numeric samples, got dtype {da.dtype}.")

        # Keep time as the trailing axis so `fids[..., k]` indexes samples
        if da.dims[-1] != DIMS.time:
            object.__setattr__(self, "fid", da.transpose(..., DIMS.time))

    # --- Construction ---

    @classmethod
    def from_array(
        cls,
        fids: np.ndarray,
        *,
        spectral_width: float,
        reference_frequency: float,
        carrier_ppm: float = 4.65,
        echo_time: float | None = None,
        coil_combined: bool = True,
        averaged: bool = True,
        dims: tuple[str, ...] | None = None,
    ) -> "Spectrum":
        """Build a Spectrum from a NumPy array of time-domain samples.

        Parameters
        ----------
        fids : np.ndarray
            Complex samples; the last axis is time.
        spectral_width : float
            Spectral width in Hz (the time spacing is ``1 / spectral_width``).
        reference_frequency : float
            Larmor frequency in MHz.
        carrier_ppm : float, optional
            Chemical shift at 0 Hz, by default 4.65.
        echo_time : float, optional
            Echo time in seconds.
        coil_combined, averaged : bool, optional
            Pre-processing state flags, both True by default.
        dims : tuple of str, optional
            Dimension names. Defaults to ``(DIMS.time,)`` for 1-D input and
            ``(DIMS.subspectrum, DIMS.time)`` for 2-D input.

        Returns
        -------
        Spectrum
        """
        fids = np.asarray(fids)
        if dims is None:
            dims = (DIMS.time,) if fids.ndim == 1 else (DIMS.subspectrum, DIMS.time)
        if DIMS.time not in dims:
            raise ValueError(f"`dims` must include '{DIMS.time}', got {tuple(dims)}.")
        n_points = fids.shape[list(dims).index(DIMS.time)]
        attrs = {
            ATTRS.reference_frequency: reference_frequency,
            ATTRS.carrier_ppm: carrier_ppm,
            ATTRS.coil_combined: coil_combined,
            ATTRS.averaged: averaged,
        }
        if echo_time is not None:
            attrs[ATTRS.echo_time] = echo_time

        t = np.arange(n_points) / spectral_width
        da = xr.DataArray(
            fids,
            dims=dims,
            coords={COORDS.time: as_variable(COORDS.time, DIMS.time, t)},
            attrs=attrs,
        )
        return cls(da)

    def with_fid(self, values) -> "Spectrum":
        """Return a new Spectrum with replaced samples and identical axes/metadata."""
        if isinstance(values, xr.DataArray):
            return dataclasses.replace(self, fid=values)
        return dataclasses.replace(self, fid=self.fid.copy(data=np.asarray(values)))

    # --- Derived views ---

    @cached_property
    def specs(self) -> xr.DataArray:
        """Centred spectrum with `frequency` [Hz] and `chemical_shift` [ppm] coords."""
        spec = to_spectrum(self.fid, dim=DIMS.time, out_dim=DIMS.frequency)
        hz = spec.coords[DIMS.frequency].values
        ppm = chemical_shift_axis(hz, self.reference_frequency, self.carrier_ppm)
        return spec.assign_coords(
            {COORDS.chemical_shift: as_variable(COORDS.chemical_shift, DIMS.frequency, ppm)}
        )

    @property
    def fids(self) -> np.ndarray:
        return self.fid.values

    @property
    def t(self) -> np.ndarray:
        return self.fid.coords[DIMS.time].values

    @property
    def ppm(self) -> np.ndarray:
        return self.specs.coords[COORDS.chemical_shift].values

    @property
    def n_points(self) -> int:
        return self.fid.sizes[DIMS.time]

    @property
    def dwell_time(self) -> float:
        t = self.t
        return float(t[1] - t[0])

    @property
    def spectral_width(self) -> float:
        return 1.0 / self.dwell_time

    @property
    def reference_frequency(self) -> float:
        return float(self.fid.attrs[ATTRS.reference_frequency])

    @property
    def carrier_ppm(self) -> float:
        return float(self.fid.attrs[ATTRS.carrier_ppm])

    @property
    def echo_time(self) -> float | None:
        return self.fid.attrs.get(ATTRS.echo_time)

    @property
    def subspecs(self) -> int:
        """Number of sub-acquisitions still packed along `DIMS.subspectrum`."""
        return self.fid.sizes.get(DIMS.subspectrum, 1)

    @property
    def coil_combined(self) -> bool:
        if self.fid.sizes.get(DIMS.coil, 1) > 1:
            return False
        return bool(self.fid.attrs.get(ATTRS.coil_combined, True))

    @property
    def averaged(self) -> bool:
        if self.fid.sizes.get(DIMS.average, 1) > 1:
            return False
        return bool(self.fid.attrs.get(ATTRS.averaged, True))

    def __repr__(self) -> str:
        return (
            f"Spectrum(n_points={self.n_points}, subspecs={self.subspecs}, "
            f"spectral_width={self.spectral_width:.1f} Hz, "
            f"reference_frequency={self.reference_frequency} MHz)"
        )
