"""Decorator engine for runtime validation, plus the xedit error taxonomy."""

import functools
from collections.abc import Callable, Iterable
from typing import Any

import xarray as xr

from .config import ATTRS


class AlignmentPreconditionError(ValueError):
    """An input violates a precondition of the alignment engine.

    Raised before any optimisation work is attempted (data not coil-combined
    or not averaged, wrong number of sub-spectra, unsupported editing mode).
    """


class AxisMismatchError(AlignmentPreconditionError):
    """Reference and target do not share sample count, time axis or ppm axis."""


class AlignmentConvergenceWarning(RuntimeWarning):
    """The least-squares solver stopped before meeting its tolerances.

    The last iterate is still used as the correction; flag the dataset for
    manual review.
    """


def _append_to_docstring(
    doc: str | None, title: str, keys: tuple[str, ...], vocab: Any
) -> str:
    """Append a NumPy-style section listing ``keys`` to an existing docstring."""
    base_doc = doc or ""
    if base_doc and not base_doc.endswith("\n\n"):
        base_doc += "\n\n" if base_doc.endswith("\n") else "\n\n"

    lines = [f"    {title}", f"    {'-' * len(title)}"]
    for k in keys:
        desc = vocab.get_description(k)
        lines.append(f"    * ``{k}``: {desc}")

    return base_doc + "\n".join(lines) + "\n"


def _check_attrs(obj: xr.DataArray, keys: Iterable[str], method_name: str) -> None:
    """Validate that required attributes exist in ``obj.attrs``."""
    missing = [k for k in keys if k not in obj.attrs]
    if missing:
        raise ValueError(
            f"Method '{method_name}' requires the following missing attributes "
            f"in `obj.attrs`: {missing}.\n\n"
            f"To fix this, assign them using standard xarray methods:\n"
            f"    >>> obj = obj.assign_attrs({{{repr(missing[0])}: value}})"
        )


def requires_attrs(*keys: str) -> Callable:
    """Decorator to enforce that specific attributes exist on the xarray input.

    Works on accessor methods (checks ``self._obj.attrs``) and on plain
    functions whose first argument is the DataArray. At import time the
    required attributes are appended to the wrapped function's docstring.

    Parameters
    ----------
    *keys : str
        The attribute string keys required by the method
        (e.g., ``ATTRS.reference_frequency``).
    """  # noqa: D401

    def decorator(func: Callable) -> Callable:
        func.__doc__ = _append_to_docstring(
            doc=func.__doc__, title="Required Attributes", keys=keys, vocab=ATTRS
        )

        @functools.wraps(func)
        def wrapper(first, *args, **kwargs):
            obj = first if isinstance(first, (xr.DataArray, xr.Dataset)) else first._obj
            _check_attrs(obj, keys, func.__name__)
            return func(first, *args, **kwargs)

        return wrapper

    return decorator
