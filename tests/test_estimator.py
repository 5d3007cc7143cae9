"""
Unit tests for the emissions models.
"""

import pytest

from errors import InvalidInput, UnknownModel
from estimator import (
    MODEL_LABELS,
    MODELS,
    EstimateParams,
    estimate,
    model_ids,
    model_label,
    one_byte,
    register_model,
    swd,
)

SIZES = [0, 1, 1024, 500_000, 1_000_000, 2**20, 2_500_000, 123_456_789]


class TestOneByteModel:
    @pytest.mark.parametrize("size", SIZES)
    def test_green_rate(self, size):
        assert one_byte(size, True) == pytest.approx(1.8 * size / 2**20, rel=1e-12, abs=0)

    @pytest.mark.parametrize("size", SIZES)
    def test_standard_rate(self, size):
        assert one_byte(size, False) == pytest.approx(4.6 * size / 2**20, rel=1e-12, abs=0)

    def test_one_megabyte(self):
        assert estimate('oneByte', 2**20, True) == pytest.approx(1.8)
        assert estimate('oneByte', 2**20, False) == pytest.approx(4.6)

    def test_default_params_match_formula(self):
        size = 1_234_567
        assert one_byte(size, False, EstimateParams()) == one_byte(size, False)


class TestSwdModel:
    @pytest.mark.parametrize("size", SIZES)
    def test_green_rate(self, size):
        assert swd(size, True) == pytest.approx(0.0015 * size * 8 / 1024, rel=1e-12, abs=0)

    @pytest.mark.parametrize("size", SIZES)
    def test_standard_rate(self, size):
        assert swd(size, False) == pytest.approx(0.0035 * size * 8 / 1024, rel=1e-12, abs=0)

    def test_one_kilobit(self):
        assert estimate('swd', 128, True) == pytest.approx(0.0015)


class TestEstimateParams:
    def test_grid_factor_scales_rate(self):
        size = 1_000_000
        params = EstimateParams(grid_factor=0.5)
        assert one_byte(size, True, params) == pytest.approx(one_byte(size, True) * 0.5)
        assert swd(size, False, params) == pytest.approx(swd(size, False) * 0.5)

    def test_returning_visitors_reload_part_of_page(self):
        size = 1_000_000
        params = EstimateParams(first_visit_share=0.75, data_reload_ratio=0.02)
        expected = one_byte(size, True) * (0.75 + 0.25 * 0.02)
        assert one_byte(size, True, params) == pytest.approx(expected)

    @pytest.mark.parametrize("kwargs", [
        {"grid_factor": -1.0},
        {"first_visit_share": 1.5},
        {"data_reload_ratio": -0.1},
    ])
    def test_out_of_range_rejected(self, kwargs):
        with pytest.raises(InvalidInput):
            EstimateParams(**kwargs)


class TestRegistry:
    def test_required_models_registered(self):
        assert model_ids()[:2] == ['oneByte', 'swd']
        assert model_label('oneByte') == 'OneByte'
        assert model_label('swd') == 'SWD'

    def test_unknown_model(self):
        with pytest.raises(UnknownModel):
            estimate('nope', 100, True)
        with pytest.raises(UnknownModel):
            model_label('nope')

    def test_negative_bytes_rejected(self):
        with pytest.raises(InvalidInput):
            estimate('oneByte', -1, True)

    def test_duplicate_registration_rejected(self):
        with pytest.raises(ValueError):
            register_model('oneByte', 'Again')(lambda b, g, p=None: 0.0)

    def test_models_are_pure(self):
        assert estimate('swd', 777_777, False) == estimate('swd', 777_777, False)

    def test_register_new_model(self, monkeypatch):
        monkeypatch.setattr('estimator.MODELS', dict(MODELS))
        monkeypatch.setattr('estimator.MODEL_LABELS', dict(MODEL_LABELS))
        import estimator

        @register_model('flat', 'Flat')
        def flat(byte_size, is_green_hosting, params=None):
            return 0.25

        assert estimator.MODELS['flat'] is flat
        assert estimate('flat', 10, True) == 0.25
