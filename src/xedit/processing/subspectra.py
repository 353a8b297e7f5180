import numpy as np
import xarray as xr

from xedit.core.config import ATTRS, DIMS
from xedit.core.modes import EditingMode
from xedit.core.spectrum import Spectrum
from xedit.core.validation import AlignmentPreconditionError, AxisMismatchError


def take_subspectrum(spectrum: Spectrum, index: int) -> Spectrum:
    """
    Extract one sub-spectrum from a packed acquisition by position.

    Parameters
    ----------
    spectrum : Spectrum
        Packed acquisition with a `DIMS.subspectrum` dimension.
    index : int
        Zero-based sub-spectrum position.

    Returns
    -------
    Spectrum
        Single sub-spectrum (``subspecs == 1``). A label coordinate on the
        sub-spectrum dimension is kept as a scalar coordinate, so
        :func:`merge_subspectra` restores it.
    """
    if DIMS.subspectrum not in spectrum.fid.dims:
        raise AlignmentPreconditionError(
            f"take_subspectrum requires a '{DIMS.subspectrum}' dimension; "
            f"the input has dimensions {list(spectrum.fid.dims)}."
        )
    n = spectrum.subspecs
    if not -n <= index < n:
        raise IndexError(f"Sub-spectrum index {index} out of range for {n} sub-spectra.")
    return spectrum.with_fid(spectrum.fid.isel({DIMS.subspectrum: index}))


def merge_subspectra(*spectra: Spectrum) -> Spectrum:
    """
    Stack single sub-spectra into one packed acquisition, preserving order.

    Attributes are taken from the first sub-spectrum. Per-spectrum lineage
    attributes (`frequency_shift`, `phase_shift`) are dropped; callers that
    need them should attach them as coordinates along `DIMS.subspectrum`.

    Raises
    ------
    AlignmentPreconditionError
        If fewer than two spectra are given or any of them is already packed.
    AxisMismatchError
        If the sample counts differ.
    """
    if len(spectra) < 2:
        raise AlignmentPreconditionError("merge_subspectra needs at least two spectra.")
    if any(s.subspecs > 1 or DIMS.subspectrum in s.fid.dims for s in spectra):
        raise AlignmentPreconditionError(
            "merge_subspectra expects single sub-spectra (subspecs == 1)."
        )
    n_points = {s.n_points for s in spectra}
    if len(n_points) > 1:
        raise AxisMismatchError(f"Cannot merge sub-spectra with sample counts {n_points}.")

    fids = [s.fid for s in spectra]
    if not all(DIMS.subspectrum in da.coords for da in fids):
        fids = [da.drop_vars(DIMS.subspectrum, errors="ignore") for da in fids]

    merged = xr.concat(
        fids,
        dim=DIMS.subspectrum,
        coords="minimal",
        compat="override",
        combine_attrs="override",
    )
    attrs = {
        k: v
        for k, v in spectra[0].fid.attrs.items()
        if k not in (ATTRS.frequency_shift, ATTRS.phase_shift)
    }
    return Spectrum(merged.assign_attrs(attrs))


def combine_subspectra(spectrum: Spectrum, mode: EditingMode | str) -> dict[str, Spectrum]:
    """
    Build the sum and difference spectra of an edited acquisition.

    MEGA yields ``sum = A + B`` and ``diff1 = A - B``. HERMES/HERCULES yield
    ``sum = A + B + C + D``, ``diff1 = (A + B) - (C + D)`` and
    ``diff2 = (A + C) - (B + D)``.

    Parameters
    ----------
    spectrum : Spectrum
        Packed acquisition with exactly ``mode.n_subspectra`` sub-spectra.
    mode : EditingMode or str
        Editing scheme.

    Returns
    -------
    dict of str to Spectrum
        Single-sub-spectrum results keyed by ``"sum"``, ``"diff1"`` and,
        for the four-way schemes, ``"diff2"``.
    """
    mode = EditingMode(mode)
    if spectrum.subspecs != mode.n_subspectra or DIMS.subspectrum not in spectrum.fid.dims:
        raise AlignmentPreconditionError(
            f"{mode.value} combination needs {mode.n_subspectra} sub-spectra, "
            f"got {spectrum.subspecs}."
        )

    fid = spectrum.fid.drop_vars(DIMS.subspectrum, errors="ignore")
    out = {}
    for name, weights in mode.combinations.items():
        w = xr.DataArray(np.asarray(weights), dims=DIMS.subspectrum)
        # Reducing over the sub-spectra also drops their per-sub-spectrum coords
        combined = (fid * w).sum(DIMS.subspectrum)
        out[name] = spectrum.with_fid(combined.assign_attrs(fid.attrs))
    return out
