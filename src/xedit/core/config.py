"""
Core configuration and vocabulary definitions for xedit xarray objects.

This module defines the single source of truth for all metadata attributes,
dimensions and coordinates expected by the xedit package.
"""


class XeditTerm(str):
    """A string subclass that holds metadata attributes.

    xarray treats it as a plain dimension/coordinate/attribute name, while
    developers can still reach `.unit` and `.description` directly.
    """

    def __new__(cls, value: str, description: str = "", unit: str = ""):
        """Create a new :class:`XeditTerm` instance with metadata.

        Parameters
        ----------
        value : str
            The string value to use for the term.
        description : str, optional
            A human-readable description of the term (default is empty).
        unit : str, optional
            The unit associated with the term, if any (default is empty).

        Returns
        -------
        XeditTerm
            A new string instance with ``description`` and ``unit`` attributes.
        """
        obj = str.__new__(cls, value)
        obj.description = description
        obj.unit = unit
        return obj

    @property
    def long_name(self) -> str:
        """Display-friendly name, e.g. 'chemical_shift' -> 'Chemical Shift'."""
        return self.replace("_", " ").title()


class BaseVocabulary:
    """
    Base class for xedit xarray vocabularies.

    Renders as a table in Jupyter and serves descriptions to the validation
    decorators.
    """

    def _get_terms(self) -> dict:
        """Collect all XeditTerm attributes declared on the class."""
        return {
            key: val
            for key, val in vars(self.__class__).items()
            if isinstance(val, XeditTerm)
        }

    def get_description(self, target_value: str) -> str:
        """
        Fetch the description for a given xarray key value.

        Parameters
        ----------
        target_value : str
            The string value of the attribute/dimension/coordinate
            (e.g., "reference_frequency", "time").

        Returns
        -------
        str
            The description string, or a fallback message if not found.
        """
        for term in self._get_terms().values():
            if term == target_value:
                return term.description or "No description provided."
        return "Unknown xarray key."

    def _repr_markdown_(self) -> str:
        cls_name = self.__class__.__name__
        lines = [
            f"### {cls_name}",
            "",
            "| Property | xarray key | Unit | Description |",
            "| :--- | :--- | :---: | :--- |",
        ]
        for prop_name, term in self._get_terms().items():
            unit = term.unit or "-"
            lines.append(f"| `{prop_name}` | `\"{term}\"` | {unit} | {term.description} |")
        return "\n".join(lines)

    def _repr_html_(self) -> str:
        """
        Render the vocabulary as an HTML table for Jupyter Notebooks.

        Returns
        -------
        str
            HTML string listing every term with its key, unit and description.
        """
        cls_name = self.__class__.__name__
        doc = self.__class__.__doc__ or ""
        desc_text = doc.strip().split("\n")[0] if doc else f"Vocabulary for {cls_name}:"

        rows = []
        for prop_name, term in self._get_terms().items():
            unit_str = f"<strong>{term.unit}</strong>" if term.unit else "-"
            rows.append(
                "<tr>"
                f"<td><code>{prop_name}</code></td>"
                f"<td><code>\"{term}\"</code></td>"
                f"<td>{unit_str}</td>"
                f"<td>{term.description}</td>"
                "</tr>"
            )

        return (
            "<div style='font-family: sans-serif; max-width: 900px;'>"
            f"<h3>{cls_name}</h3><p><em>{desc_text}</em></p>"
            "<table style='width: 100%; text-align: left;'>"
            "<tr><th>Property</th><th>xarray String Key</th>"
            "<th>Unit</th><th>Description</th></tr>"
            + "".join(rows)
            + "</table></div>"
        )


class XeditAttributes(BaseVocabulary):
    """Official metadata attribute keys for xedit xarray objects (`.attrs`)."""

    reference_frequency = XeditTerm(
        "reference_frequency",
        description=(
            "The measured Larmor frequency of the target nucleus. It converts "
            "frequency offsets (Hz) to parts-per-million (ppm)."
        ),
        unit="MHz",
    )

    carrier_ppm = XeditTerm(
        "carrier_ppm",
        description=(
            "The chemical shift located at 0 Hz in the digitized baseband signal. "
            "Typically the water resonance (4.65 to 4.7 ppm) for 1H MRS."
        ),
        unit="ppm",
    )

    echo_time = XeditTerm(
        "echo_time", description="Echo time of the acquisition.", unit="s"
    )

    # --- Pre-processing state ---
    coil_combined = XeditTerm(
        "coil_combined",
        description="Whether the receiver channels have already been combined.",
    )
    averaged = XeditTerm(
        "averaged",
        description="Whether the individual transients have already been averaged.",
    )

    # --- Alignment lineage ---
    frequency_shift = XeditTerm(
        "frequency_shift",
        description="Frequency correction applied to the time-domain signal.",
        unit="Hz",
    )
    phase_shift = XeditTerm(
        "phase_shift",
        description="Zero-order phase correction applied to the time-domain signal.",
        unit="degrees",
    )
    editing_mode = XeditTerm(
        "editing_mode",
        description="Spectral editing scheme used for sub-spectrum alignment.",
    )


class XeditDimensions(BaseVocabulary):
    """Official dimension names for xedit xarray objects (`.dims`)."""

    time = XeditTerm(
        "time", description="Time-domain dimension for Free Induction Decay (FID) data."
    )
    frequency = XeditTerm(
        "frequency", description="Frequency-domain dimension for spectral data."
    )
    chemical_shift = XeditTerm(
        "chemical_shift", description="Chemical shift dimension for spectral data."
    )
    subspectrum = XeditTerm(
        "subspectrum",
        description="Dimension holding the interleaved editing sub-acquisitions.",
    )
    average = XeditTerm(
        "average", description="Dimension for multiple signal acquisitions/averages."
    )
    coil = XeditTerm("coil", description="Dimension for multi-coil phased array data.")


class XeditCoordinates(BaseVocabulary):
    """Official coordinate names for xedit xarray objects (`.coords`)."""

    time = XeditTerm("time", description="Time coordinates.", unit="s")

    frequency = XeditTerm("frequency", description="Frequency coordinates.", unit="Hz")

    chemical_shift = XeditTerm(
        "chemical_shift", description="Chemical shift coordinates.", unit="ppm"
    )

    # --- Per sub-spectrum correction vectors ---
    frequency_shift = XeditTerm(
        "frequency_shift",
        description="Frequency correction estimated for each sub-spectrum.",
        unit="Hz",
    )
    phase_shift = XeditTerm(
        "phase_shift",
        description="Phase correction estimated for each sub-spectrum.",
        unit="degrees",
    )


# =============================================================================
# Global Singletons
# =============================================================================
ATTRS = XeditAttributes()
DIMS = XeditDimensions()
COORDS = XeditCoordinates()
