import numpy as np
import pytest

from similari.bbox import BBoxConversionError, BoundingBox, Universal2DBox
from similari.kalman import CHI2INV95, KalmanState


def _state(values):
    n = len(values)
    return KalmanState(mean=np.array(values, dtype=float), covariance=np.eye(n))


def test_universal_bbox_without_angle():
    state = _state([1.0, 2.0, 0.0, 0.5, 4.0, 0.0, 0.0, 0.0, 0.0, 0.0])
    box = state.universal_bbox()
    assert box.angle is None
    assert box == Universal2DBox(1.0, 2.0, None, 0.5, 4.0)


def test_universal_bbox_with_angle():
    state = _state([1.0, 2.0, 0.3, 0.5, 4.0])
    box = state.universal_bbox()
    assert box.angle == pytest.approx(0.3)
    assert box.xc == pytest.approx(1.0)
    assert box.height == pytest.approx(4.0)


def test_bbox_round_trip():
    original = BoundingBox(1.0, 2.0, 5.0, 5.0)
    u = original.as_xyaah()
    state = _state([u.xc, u.yc, 0.0, u.aspect, u.height])
    assert state.bbox() == original


def test_bbox_of_oriented_state_fails():
    state = _state([1.0, 2.0, 0.3, 0.5, 4.0])
    with pytest.raises(BBoxConversionError):
        state.bbox()


def test_short_state_cannot_be_a_box():
    state = _state([1.0, 2.0, 0.0, 0.0])
    with pytest.raises(ValueError):
        state.universal_bbox()


def test_point_coordinates():
    state = _state([3.5, -1.25, 0.0, 0.0])
    assert state.x() == 3.5
    assert state.y() == -1.25


def test_dump_writes_mean_and_covariance(capsys):
    state = _state([1.0, 2.0])
    state.dump()
    err = capsys.readouterr().err
    assert "Mean=" in err
    assert "Covariance=" in err
    assert "       1.000" in err
    assert err.count("\n") == 1 + 1 + 1 + 2


def test_chi2_table_values_as_state():
    assert list(CHI2INV95) == sorted(CHI2INV95)
    assert len(CHI2INV95) == 9
    state = _state(list(CHI2INV95))
    box = state.universal_bbox()
    assert box.xc == pytest.approx(3.8415)
    assert box.yc == pytest.approx(5.9915)
    assert box.angle == pytest.approx(7.8147)
    assert box.aspect == pytest.approx(9.4877)
    assert box.height == pytest.approx(11.070)
    assert state.x() == pytest.approx(3.8415)
    assert state.y() == pytest.approx(5.9915)