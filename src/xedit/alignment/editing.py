"""
Orchestration of pairwise alignment over the sub-spectra of an edited acquisition.

The correction order of each editing scheme is fixed (see
:attr:`EditingMode.correction_order`): MEGA aligns B onto A; HERMES and
HERCULES align B onto A, C onto A, then D onto the already corrected C.
"""

import logging

import numpy as np
from joblib import Parallel, delayed

from xedit.alignment.config import AlignmentConfig
from xedit.alignment.pairwise import (
    AlignmentResult,
    _check_pair,
    _check_single,
    _report,
    _solve_pair,
)
from xedit.core.config import ATTRS, COORDS, DIMS
from xedit.core.modes import CorrectionStep, EditingMode
from xedit.core.spectrum import Spectrum
from xedit.core.utils import as_variable
from xedit.core.validation import AlignmentPreconditionError
from xedit.processing.subspectra import merge_subspectra, take_subspectrum

logger = logging.getLogger(__name__)


def _resolve_mode(mode: EditingMode | str | None) -> EditingMode | None:
    if mode is None or isinstance(mode, EditingMode):
        return mode
    try:
        return EditingMode(mode)
    except ValueError:
        supported = ", ".join(m.value for m in EditingMode)
        raise AlignmentPreconditionError(
            f"Unsupported editing mode {mode!r}. Supported modes: {supported}."
        ) from None


def _dependency_waves(order: tuple[CorrectionStep, ...]) -> list[list[CorrectionStep]]:
    """Group correction steps so that each wave only reads finished sub-spectra.

    A step waits for every earlier step that writes its reference or its
    target. Within a wave the documented order is kept.
    """
    wave_of = {}
    waves: list[list[CorrectionStep]] = []
    for step in order:
        deps = [wave_of[idx] for idx in (step.reference, step.target) if idx in wave_of]
        wave = max(deps) + 1 if deps else 0
        if wave == len(waves):
            waves.append([])
        waves[wave].append(step)
        wave_of[step.target] = wave
    return waves


def _split_inputs(
    spectra: tuple[Spectrum, ...], mode: EditingMode | None
) -> tuple[list[Spectrum], EditingMode, bool]:
    """Turn the accepted call forms into an ordered sub-spectrum set.

    Returns the single sub-spectra, the resolved mode and whether the input
    was one packed acquisition.
    """
    if not spectra:
        raise AlignmentPreconditionError("align_subspectra needs at least one spectrum.")

    if len(spectra) == 1:
        packed = spectra[0]
        if mode is None:
            raise AlignmentPreconditionError(
                "A packed acquisition needs an explicit mode (MEGA, HERMES or HERCULES)."
            )
        if packed.subspecs == 1:
            raise AlignmentPreconditionError(
                f"{mode.value} alignment needs {mode.n_subspectra} sub-spectra, but the "
                f"input holds a single sub-spectrum (subspecs == 1)."
            )
        if packed.subspecs != mode.n_subspectra:
            raise AlignmentPreconditionError(
                f"{mode.value} alignment needs {mode.n_subspectra} sub-spectra, "
                f"got subspecs == {packed.subspecs}."
            )
        if not packed.coil_combined:
            raise AlignmentPreconditionError(
                "The acquisition is not coil-combined. Combine the receiver channels first."
            )
        if not packed.averaged:
            raise AlignmentPreconditionError(
                "The acquisition is not averaged. Average the transients first."
            )
        subs = [take_subspectrum(packed, i) for i in range(packed.subspecs)]
        return subs, mode, True

    if mode is None:
        if len(spectra) != 2:
            raise AlignmentPreconditionError(
                f"{len(spectra)} separate sub-spectra need an explicit mode "
                f"(HERMES or HERCULES for four)."
            )
        mode = EditingMode.MEGA
    if len(spectra) != mode.n_subspectra:
        raise AlignmentPreconditionError(
            f"{mode.value} alignment needs {mode.n_subspectra} sub-spectra, got {len(spectra)}."
        )
    return list(spectra), mode, False


def _validate_set(subs: list[Spectrum], mode: EditingMode) -> None:
    for label, sub in zip(mode.labels, subs):
        _check_single(sub, f"sub-spectrum {label}")
    for sub in subs[1:]:
        _check_pair(subs[0], sub)


def _run_correction_order(
    subs: list[Spectrum], mode: EditingMode, config: AlignmentConfig, n_jobs: int
) -> tuple[list[Spectrum], list[AlignmentResult]]:
    """Execute the correction order, replacing each target with its corrected copy."""
    aligned = list(subs)
    results: dict[CorrectionStep, AlignmentResult] = {}

    for wave in _dependency_waves(mode.correction_order):
        if n_jobs == 1 or len(wave) == 1:
            wave_results = [
                _solve_pair(aligned[step.reference], aligned[step.target], config)
                for step in wave
            ]
        else:
            wave_results = Parallel(n_jobs=n_jobs, prefer="threads")(
                delayed(_solve_pair)(aligned[step.reference], aligned[step.target], config)
                for step in wave
            )
        for step, result in zip(wave, wave_results):
            aligned[step.target] = result.corrected
            results[step] = result

    ordered = [results[step] for step in mode.correction_order]
    for step, result in zip(mode.correction_order, ordered):
        _report(result, label=f"{mode.labels[step.target]} onto {mode.labels[step.reference]}")
    return aligned, ordered


def align_subspectra_results(
    *spectra: Spectrum,
    mode: EditingMode | str | None = None,
    config: AlignmentConfig | None = None,
    n_jobs: int = 1,
) -> tuple[list[Spectrum], list[AlignmentResult]]:
    """
    Align sub-spectra and return the per-step solver results.

    Accepts the same call forms as :func:`align_subspectra` but does not
    merge. Use it to inspect correction vectors and objective values.

    Returns
    -------
    aligned : list of Spectrum
        Single sub-spectra in label order (A, B[, C, D]); A is unchanged.
    results : list of AlignmentResult
        One entry per step of ``mode.correction_order``, in that order.
    """
    config = config or AlignmentConfig()
    subs, mode, _ = _split_inputs(spectra, _resolve_mode(mode))
    _validate_set(subs, mode)
    return _run_correction_order(subs, mode, config, n_jobs)


def align_subspectra(
    *spectra: Spectrum,
    mode: EditingMode | str | None = None,
    config: AlignmentConfig | None = None,
    n_jobs: int = 1,
) -> Spectrum | tuple[Spectrum, Spectrum]:
    """
    Frequency- and phase-align the sub-spectra of an edited acquisition.

    Three call forms are accepted:

    * ``align_subspectra(packed, mode=...)`` splits a packed acquisition by
      sub-spectrum index and returns the merged, aligned acquisition.
    * ``align_subspectra(a, b)`` aligns B onto A (MEGA) and returns
      ``(a, corrected_b)`` without merging.
    * ``align_subspectra(a, b, c, d, mode="HERMES")`` (or ``"HERCULES"``)
      returns the merged, aligned acquisition.

    Parameters
    ----------
    *spectra : Spectrum
        One packed acquisition, or 2/4 single sub-spectra in label order.
    mode : EditingMode or str, optional
        Editing scheme. Required for the packed and four-input forms.
    config : AlignmentConfig, optional
        Solver and window settings shared by every pairwise step.
    n_jobs : int, optional
        Run independent steps (B onto A and C onto A for HERMES/HERCULES) in
        parallel threads with joblib. Defaults to 1 (sequential).

    Returns
    -------
    Spectrum or tuple of Spectrum
        The merged acquisition with ``subspecs == mode.n_subspectra``, order
        preserved, carrying the applied corrections as ``frequency_shift``
        and ``phase_shift`` coordinates along `DIMS.subspectrum`; or the pair
        ``(reference, corrected target)`` for the two-input form.

    Raises
    ------
    AlignmentPreconditionError
        If the input is not coil-combined or not averaged, the sub-spectrum
        count does not match the mode, or the mode is missing/unsupported.
        Raised before any optimisation.
    AxisMismatchError
        If the sub-spectra do not share their time and ppm axes.

    Warns
    -----
    AlignmentConvergenceWarning
        Once per pairwise step whose solver hit ``config.max_nfev``.
    """
    config = config or AlignmentConfig()
    subs, mode, packed = _split_inputs(spectra, _resolve_mode(mode))
    _validate_set(subs, mode)
    aligned, results = _run_correction_order(subs, mode, config, n_jobs)

    if not packed and mode.n_subspectra == 2:
        return aligned[0], aligned[1]

    freq = np.zeros(mode.n_subspectra)
    phase = np.zeros(mode.n_subspectra)
    for step, result in zip(mode.correction_order, results):
        freq[step.target] = result.correction.freq_hz
        phase[step.target] = result.correction.phase_deg

    merged = merge_subspectra(*aligned)
    da = merged.fid
    if DIMS.subspectrum not in da.coords:
        da = da.assign_coords({DIMS.subspectrum: list(mode.labels)})
    da = da.assign_coords(
        {
            COORDS.frequency_shift: as_variable(COORDS.frequency_shift, DIMS.subspectrum, freq),
            COORDS.phase_shift: as_variable(COORDS.phase_shift, DIMS.subspectrum, phase),
        }
    ).assign_attrs({ATTRS.editing_mode: mode.value})

    logger.info(
        "%s alignment: frequency shifts %s Hz, phase shifts %s deg",
        mode.value,
        np.round(freq, 3).tolist(),
        np.round(phase, 3).tolist(),
    )
    return merged.with_fid(da)
