import numpy as np
import pytest
import xarray as xr

from xedit.core.config import COORDS, DIMS
from xedit.processing.fourier import (
    _to_fid_ndarray,
    _to_spectrum_ndarray,
    fft,
    fftshift,
    ifft,
    ifftshift,
    to_fid,
    to_spectrum,
)


@pytest.fixture
def fid_da():
    """A single complex exponential at +100 Hz, 1024 points, 2 kHz spectral width."""
    n, sw = 1024, 2000.0
    t = np.arange(n) / sw
    return xr.DataArray(
        np.exp(2j * np.pi * 100.0 * t - 20.0 * t),
        dims=[DIMS.time],
        coords={DIMS.time: t},
        attrs={"note": "kept"},
    )


class TestShifts:
    """fftshift/ifftshift roll data and coordinates together."""

    @pytest.mark.parametrize("n", [8, 9])
    def test_matches_numpy(self, n):
        da = xr.DataArray(np.arange(n), dims=["x"], coords={"x": np.arange(n)})
        np.testing.assert_array_equal(fftshift(da, "x").values, np.fft.fftshift(np.arange(n)))
        np.testing.assert_array_equal(ifftshift(da, "x").values, np.fft.ifftshift(np.arange(n)))

    @pytest.mark.parametrize("n", [8, 9])
    def test_inverse(self, n):
        da = xr.DataArray(np.arange(n), dims=["x"], coords={"x": np.arange(n)})
        xr.testing.assert_identical(ifftshift(fftshift(da, "x"), "x"), da)


class TestTransforms:
    """Centred transforms, frequency axes and round trips."""

    def test_to_spectrum_is_centred(self, fid_da):
        """Index 0 holds the most negative frequency; the axis ascends."""
        spec = to_spectrum(fid_da)
        freqs = spec.coords[DIMS.frequency].values
        assert freqs[0] == pytest.approx(-1000.0)
        assert np.all(np.diff(freqs) > 0)
        assert freqs[np.argmax(np.abs(spec.values))] == pytest.approx(100.0, abs=2.0)

    def test_unnormalised_forward(self, fid_da):
        """The forward transform is the unscaled DFT (sum over samples)."""
        spec = fft(fid_da)
        assert spec.values[0] == pytest.approx(np.sum(fid_da.values))

    def test_frequency_coord_has_units(self, fid_da):
        spec = to_spectrum(fid_da)
        assert spec.coords[COORDS.frequency].attrs["units"] == "Hz"

    def test_round_trip(self, fid_da):
        back = to_fid(to_spectrum(fid_da))
        np.testing.assert_allclose(back.values, fid_da.values, atol=1e-12)
        np.testing.assert_allclose(
            back.coords[DIMS.time].values, fid_da.coords[DIMS.time].values, atol=1e-12
        )

    def test_to_fid_drops_derived_coords(self, fid_da):
        """A ppm coordinate on the frequency axis must not block the inverse."""
        spec = to_spectrum(fid_da)
        spec = spec.assign_coords(
            {COORDS.chemical_shift: (DIMS.frequency, spec.coords[DIMS.frequency].values)}
        )
        back = to_fid(spec)
        assert COORDS.chemical_shift not in back.coords

    def test_ifft_inverts_fft(self, fid_da):
        np.testing.assert_allclose(ifft(fft(fid_da), dim=DIMS.time).values, fid_da.values)

    def test_attrs_preserved(self, fid_da):
        assert to_spectrum(fid_da).attrs == {"note": "kept"}

    def test_extra_dims_broadcast(self, fid_da):
        stacked = xr.concat([fid_da, 2 * fid_da], dim=DIMS.subspectrum)
        spec = to_spectrum(stacked)
        assert spec.dims == (DIMS.subspectrum, DIMS.frequency)
        np.testing.assert_allclose(spec.values[1], 2 * spec.values[0])

    def test_missing_dim_raises(self):
        da = xr.DataArray(np.zeros(4), dims=["x"])
        with pytest.raises(ValueError, match="missing dimension"):
            to_spectrum(da)


class TestNdarrayKernels:
    """The pure-NumPy kernels must agree with the xarray wrappers."""

    def test_matches_xarray(self, fid_da):
        np.testing.assert_array_equal(
            _to_spectrum_ndarray(fid_da.values), to_spectrum(fid_da).values
        )

    def test_round_trip(self):
        rng = np.random.default_rng(4)
        x = rng.standard_normal(257) + 1j * rng.standard_normal(257)
        np.testing.assert_allclose(_to_fid_ndarray(_to_spectrum_ndarray(x)), x, atol=1e-12)
