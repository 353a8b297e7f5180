import dataclasses

import pytest

from xedit.alignment.config import AlignmentConfig
from xedit.core.modes import CorrectionStep, EditingMode
from xedit.visualization.plot import PlotAlignmentConfig


class TestEditingMode:
    """Editing schemes carry a fixed sub-spectrum count and correction order."""

    @pytest.mark.parametrize(
        "mode, count", [(EditingMode.MEGA, 2), (EditingMode.HERMES, 4), (EditingMode.HERCULES, 4)]
    )
    def test_counts(self, mode, count):
        assert mode.n_subspectra == count
        assert len(mode.labels) == count

    def test_string_lookup_is_case_insensitive(self):
        assert EditingMode("hermes") is EditingMode.HERMES
        assert EditingMode("Mega") is EditingMode.MEGA

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            EditingMode("PRESS")

    def test_hermes_and_hercules_are_distinct(self):
        assert EditingMode.HERMES is not EditingMode.HERCULES
        assert len(list(EditingMode)) == 3

    def test_mega_order(self):
        assert EditingMode.MEGA.correction_order == (CorrectionStep(target=1, reference=0),)

    @pytest.mark.parametrize("mode", [EditingMode.HERMES, EditingMode.HERCULES])
    def test_four_way_order_chains_d_onto_c(self, mode):
        assert mode.correction_order == (
            CorrectionStep(target=1, reference=0),
            CorrectionStep(target=2, reference=0),
            CorrectionStep(target=3, reference=2),
        )

    def test_combination_weights(self):
        assert EditingMode.MEGA.combinations["diff1"] == (1.0, -1.0)
        assert EditingMode.HERCULES.combinations["diff2"] == (1.0, -1.0, 1.0, -1.0)


class TestAlignmentConfig:
    def test_defaults(self):
        cfg = AlignmentConfig()
        assert cfg.ppm_range == (1.95, 4.0)
        assert cfg.x0 == (0.0, 0.0)
        assert cfg.method == "trf"
        assert cfg.max_nfev == 1000

    def test_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            AlignmentConfig().max_nfev = 5

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"ppm_range": (4.0, 1.95)},
            {"method": "lm"},
            {"max_nfev": 0},
            {"x0": (0.0,)},
        ],
    )
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            AlignmentConfig(**kwargs)

    @pytest.mark.parametrize("cfg", [AlignmentConfig(), PlotAlignmentConfig()])
    def test_every_field_is_documented(self, cfg):
        for f in dataclasses.fields(cfg):
            assert f.metadata.get("group"), f"{f.name} has no group"
            assert f.metadata.get("description"), f"{f.name} has no description"

    def test_text_and_markdown_repr(self):
        cfg = AlignmentConfig(max_nfev=50)
        assert "max_nfev" in str(cfg)
        assert "SOLVER" in str(cfg)
        md = cfg._repr_markdown_()
        assert "### AlignmentConfig" in md
        assert "`50`" in md
