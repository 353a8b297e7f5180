"""
The primary xarray accessor namespace for the xedit package.

This module exposes the `.xed` namespace to xarray DataArrays. The user-facing
API stays flat for method chaining (e.g.
``da.xed.align_subspectra("MEGA").xed.to_spectrum()``), while the underlying
implementation is split into Mixin classes by concern.
"""

import matplotlib.pyplot as plt
import xarray as xr

from xedit.alignment.config import AlignmentConfig
from xedit.alignment.editing import align_subspectra
from xedit.core.config import ATTRS, COORDS, DIMS
from xedit.core.modes import EditingMode
from xedit.core.spectrum import Spectrum
from xedit.core.utils import _check_dims, as_variable, chemical_shift_axis
from xedit.core.validation import requires_attrs
from xedit.processing.correction import apply_correction
from xedit.processing.fourier import fft, ifft, to_fid, to_spectrum
from xedit.processing.subspectra import combine_subspectra, take_subspectrum
from xedit.visualization.plot import PlotAlignmentConfig

# =============================================================================
# Sub-Accessors (Terminal / Visualization tools)
# =============================================================================


class XeditPlotAccessor:
    """Sub-accessor for xedit plotting functionalities (accessed via .xed.plot)."""

    def __init__(self, obj: xr.DataArray):
        self._obj = obj

    def alignment(
        self,
        ppm_range: tuple[float, float] | None = (0.5, 4.5),
        ax: plt.Axes | None = None,
        config: PlotAlignmentConfig | None = None,
    ) -> plt.Axes:
        """Overlay the real part of each sub-spectrum of a time-domain acquisition."""
        from xedit.visualization.plot import plot_alignment as _plot_alignment

        return _plot_alignment(Spectrum(self._obj), ppm_range=ppm_range, ax=ax, config=config)


# =============================================================================
# Mixins (Developer API Modularity)
# =============================================================================


class XeditSpectrumCoordsMixin:
    """Mixin providing operations to translate physical coordinate systems."""

    @requires_attrs(ATTRS.reference_frequency, ATTRS.carrier_ppm)
    def to_ppm(self, dim: str = DIMS.frequency) -> xr.DataArray:
        """Convert relative frequency axis [Hz] to absolute chemical shift axis [ppm]."""
        _check_dims(self._obj, dim, "to_ppm")

        ppm_coords = chemical_shift_axis(
            self._obj.coords[dim].values,
            self._obj.attrs[ATTRS.reference_frequency],
            self._obj.attrs[ATTRS.carrier_ppm],
        )
        shift_var = as_variable(COORDS.chemical_shift, dim, ppm_coords)

        obj = self._obj.assign_coords({COORDS.chemical_shift: shift_var})
        return obj.swap_dims({dim: DIMS.chemical_shift})

    @requires_attrs(ATTRS.reference_frequency, ATTRS.carrier_ppm)
    def to_hz(self, dim: str = DIMS.chemical_shift) -> xr.DataArray:
        """Convert absolute chemical shift axis [ppm] to relative frequency axis [Hz]."""
        _check_dims(self._obj, dim, "to_hz")

        mhz = self._obj.attrs[ATTRS.reference_frequency]
        carrier_ppm = self._obj.attrs[ATTRS.carrier_ppm]
        hz_coords = (self._obj.coords[dim].values - carrier_ppm) * mhz

        freq_var = as_variable(COORDS.frequency, dim, hz_coords)

        obj = self._obj.assign_coords({COORDS.frequency: freq_var})
        return obj.swap_dims({dim: DIMS.frequency})


class XeditFourierMixin:
    """Mixin providing the FID <-> spectrum transforms."""

    def fft(self, dim: str = DIMS.time, out_dim: str | None = None) -> xr.DataArray:
        """Unshifted FFT along ``dim``; see :func:`xedit.processing.fourier.fft`."""
        return fft(self._obj, dim=dim, out_dim=out_dim)

    def ifft(self, dim: str = DIMS.frequency, out_dim: str | None = None) -> xr.DataArray:
        """Unshifted inverse FFT along ``dim``; see :func:`xedit.processing.fourier.ifft`."""
        return ifft(self._obj, dim=dim, out_dim=out_dim)

    def to_spectrum(self, dim: str = DIMS.time, out_dim: str = DIMS.frequency) -> xr.DataArray:
        """
        Convert a time-domain FID to a centred frequency-domain spectrum.

        Parameters
        ----------
        dim : str, optional
            The time dimension to transform, by default `DIMS.time`.
        out_dim : str, optional
            The name of the resulting frequency dimension, by default `DIMS.frequency`.

        Returns
        -------
        xr.DataArray
            The centred spectrum with frequency coordinates [Hz].
        """
        return to_spectrum(self._obj, dim=dim, out_dim=out_dim)

    def to_fid(self, dim: str = DIMS.frequency, out_dim: str = DIMS.time) -> xr.DataArray:
        """Convert a centred spectrum back to a time-domain FID."""
        return to_fid(self._obj, dim=dim, out_dim=out_dim)


class XeditEditingMixin:
    """Mixin providing correction and sub-spectrum operations on time-domain data."""

    @requires_attrs(ATTRS.reference_frequency, ATTRS.carrier_ppm)
    def as_spectrum(self) -> Spectrum:
        """Wrap the DataArray in an immutable :class:`~xedit.core.Spectrum`."""
        return Spectrum(self._obj)

    def apply_correction(
        self, freq_hz: float = 0.0, phase_deg: float = 0.0, dim: str = DIMS.time
    ) -> xr.DataArray:
        """
        Shift the spectrum by ``freq_hz`` and rotate it by ``phase_deg``.

        The operator is applied in the time domain; the values are stored in
        the attributes as `frequency_shift` and `phase_shift`.
        """
        return apply_correction(self._obj, freq_hz=freq_hz, phase_deg=phase_deg, dim=dim)

    def take_subspectrum(self, index: int) -> xr.DataArray:
        """Select one sub-spectrum by position along `DIMS.subspectrum`."""
        return take_subspectrum(self.as_spectrum(), index).fid

    def align_subspectra(
        self,
        mode: EditingMode | str,
        config: AlignmentConfig | None = None,
        n_jobs: int = 1,
    ) -> xr.DataArray:
        """
        Frequency- and phase-align the packed sub-spectra of this acquisition.

        Parameters
        ----------
        mode : EditingMode or str
            ``"MEGA"``, ``"HERMES"`` or ``"HERCULES"``.
        config : AlignmentConfig, optional
            Solver and window settings.
        n_jobs : int, optional
            Threads for independent correction steps, by default 1.

        Returns
        -------
        xr.DataArray
            The aligned FID with `frequency_shift` and `phase_shift`
            coordinates along `DIMS.subspectrum`.
        """
        return align_subspectra(self.as_spectrum(), mode=mode, config=config, n_jobs=n_jobs).fid

    def combine_subspectra(self, mode: EditingMode | str) -> xr.Dataset:
        """Sum and difference FIDs of the editing scheme as a Dataset (``sum``, ``diff1``...)."""
        combined = combine_subspectra(self.as_spectrum(), mode)
        return xr.Dataset({name: spec.fid for name, spec in combined.items()})


# =============================================================================
# Main User API Registration
# =============================================================================


@xr.register_dataarray_accessor("xed")
class XeditAccessor(XeditSpectrumCoordsMixin, XeditFourierMixin, XeditEditingMixin):
    """
    Main Accessor for xarray DataArrays holding edited MRS acquisitions.

    This class is registered under the `.xed` namespace and combines several
    Mixins into one fluent API (e.g.
    ``da.xed.align_subspectra("HERMES").xed.to_spectrum().xed.to_ppm()``).

    Attributes
    ----------
    _obj : xr.DataArray
        The underlying xarray DataArray object being operated on.
    """

    def __init__(self, xarray_obj: xr.DataArray):
        """Initialize the accessor with the xarray object."""
        self._obj = xarray_obj
        self._plot = None  # Cache for the plot sub-accessor

    @property
    def plot(self) -> XeditPlotAccessor:
        """Access xedit plotting functionalities for DataArrays."""
        if self._plot is None:
            self._plot = XeditPlotAccessor(self._obj)
        return self._plot
