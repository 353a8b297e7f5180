import dataclasses

import numpy as np
import pytest
import xarray as xr
from conftest import CARRIER_PPM, N_POINTS, REFERENCE_FREQUENCY, SPECTRAL_WIDTH

from xedit.core.config import ATTRS, COORDS, DIMS
from xedit.core.spectrum import Spectrum


class TestConstruction:
    """Validation performed when a Spectrum is created."""

    def test_from_array_1d(self):
        spec = Spectrum.from_array(
            np.ones(64, dtype=complex), spectral_width=1000.0, reference_frequency=127.8
        )
        assert spec.fid.dims == (DIMS.time,)
        assert spec.n_points == 64
        assert spec.subspecs == 1
        assert spec.dwell_time == pytest.approx(1e-3)
        assert spec.spectral_width == pytest.approx(1000.0)
        assert spec.carrier_ppm == 4.65

    def test_from_array_2d_is_packed(self):
        spec = Spectrum.from_array(
            np.ones((4, 64), dtype=complex), spectral_width=1000.0, reference_frequency=127.8
        )
        assert spec.fid.dims == (DIMS.subspectrum, DIMS.time)
        assert spec.subspecs == 4

    def test_echo_time_optional(self):
        spec = Spectrum.from_array(
            np.ones(8), spectral_width=1000.0, reference_frequency=127.8, echo_time=0.08
        )
        assert spec.echo_time == 0.08
        assert Spectrum.from_array(
            np.ones(8), spectral_width=1000.0, reference_frequency=127.8
        ).echo_time is None

    def test_rejects_non_dataarray(self):
        with pytest.raises(TypeError):
            Spectrum(np.ones(8))

    def test_rejects_missing_time_dim(self):
        da = xr.DataArray(np.ones(8), dims=["x"], attrs={ATTRS.reference_frequency: 1.0})
        with pytest.raises(ValueError, match="missing dimension"):
            Spectrum(da)

    def test_rejects_missing_attrs(self):
        da = xr.DataArray(np.ones(8), dims=[DIMS.time], coords={DIMS.time: np.arange(8.0)})
        with pytest.raises(ValueError, match="missing attributes"):
            Spectrum(da)

    def test_rejects_missing_time_coord(self):
        da = xr.DataArray(
            np.ones(8),
            dims=[DIMS.time],
            attrs={ATTRS.reference_frequency: 127.8, ATTRS.carrier_ppm: 4.65},
        )
        with pytest.raises(ValueError, match="coordinate"):
            Spectrum(da)

    def test_rejects_single_sample(self):
        with pytest.raises(ValueError, match="two"):
            Spectrum.from_array(np.ones(1), spectral_width=1.0, reference_frequency=1.0)

    def test_time_moved_to_last_axis(self):
        spec = Spectrum.from_array(
            np.ones((64, 2), dtype=complex),
            spectral_width=1000.0,
            reference_frequency=127.8,
            dims=(DIMS.time, DIMS.subspectrum),
        )
        assert spec.fid.dims[-1] == DIMS.time
        assert spec.fids.shape == (2, 64)

    def test_is_frozen(self, spec_a):
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec_a.fid = spec_a.fid * 2


class TestDerivedViews:
    """``specs`` and the axes are always derived from the FID."""

    def test_lengths_agree(self, spec_a):
        n = spec_a.n_points
        assert n == N_POINTS
        assert len(spec_a.fids) == len(spec_a.specs) == len(spec_a.t) == len(spec_a.ppm) == n

    def test_time_axis_uniform(self, spec_a):
        np.testing.assert_allclose(np.diff(spec_a.t), 1.0 / SPECTRAL_WIDTH)

    def test_ppm_axis(self, spec_a):
        """ppm ascends and maps 0 Hz onto the carrier."""
        ppm = spec_a.ppm
        assert np.all(np.diff(ppm) > 0)
        hz = spec_a.specs.coords[COORDS.frequency].values
        np.testing.assert_allclose(ppm, CARRIER_PPM + hz / REFERENCE_FREQUENCY)
        assert ppm[np.argmin(np.abs(hz))] == pytest.approx(CARRIER_PPM)

    def test_peak_lands_at_its_chemical_shift(self, spec_a):
        """The NAA singlet (largest peak) sits at 2.01 ppm within one bin."""
        ppm = spec_a.ppm
        peak = ppm[np.argmax(np.real(spec_a.specs.values))]
        bin_ppm = SPECTRAL_WIDTH / N_POINTS / REFERENCE_FREQUENCY
        assert abs(peak - 2.01) <= bin_ppm

    def test_specs_cached(self, spec_a):
        assert spec_a.specs is spec_a.specs

    def test_with_fid_recomputes_specs(self, spec_a):
        doubled = spec_a.with_fid(spec_a.fids * 2)
        np.testing.assert_allclose(doubled.specs.values, 2 * spec_a.specs.values)
        assert doubled.fid.attrs == spec_a.fid.attrs
        np.testing.assert_array_equal(doubled.t, spec_a.t)


class TestPreprocessingState:
    """``coil_combined`` / ``averaged`` come from dimensions and flags."""

    def test_defaults_true(self, spec_a):
        assert spec_a.coil_combined
        assert spec_a.averaged

    def test_flags_false(self):
        spec = Spectrum.from_array(
            np.ones(8),
            spectral_width=1.0,
            reference_frequency=1.0,
            coil_combined=False,
            averaged=False,
        )
        assert not spec.coil_combined
        assert not spec.averaged

    def test_extra_dims_mean_unprocessed(self):
        spec = Spectrum.from_array(
            np.ones((4, 3, 8)),
            spectral_width=1.0,
            reference_frequency=1.0,
            dims=(DIMS.coil, DIMS.average, DIMS.time),
        )
        assert not spec.coil_combined
        assert not spec.averaged

    def test_singleton_dims_count_as_processed(self):
        spec = Spectrum.from_array(
            np.ones((1, 8)),
            spectral_width=1.0,
            reference_frequency=1.0,
            dims=(DIMS.coil, DIMS.time),
        )
        assert spec.coil_combined
