"""Batch statistics and the plot helpers built on them."""
import numpy as np
import pytest

from conftest import make_trajectory
from trajectorytuner.model.statistics import closest_index, closest_record, compute_stats, xy_bounds
from trajectorytuner.trajectories.langevin import LangevinModel
from trajectorytuner.trajectories.lissajous import LissajousModel


def test_empty_batch():
    assert compute_stats([]) == []


def test_single_trajectory_has_no_spread():
    trajectory = make_trajectory([0.0, 1.5, 2.0, 0.5], accels=[3.0, 1.0, 0.0, 2.0])
    stats = compute_stats([trajectory])

    assert len(stats) == len(trajectory)
    for record, speed, accel, t in zip(stats, trajectory.speed, trajectory.accel, trajectory.t):
        assert record.t == t
        assert record.speed_std == 0.0
        assert record.speed_min == record.speed_max == record.speed_mean == speed
        assert record.speed_lower == record.speed_upper == speed
        assert record.accel_std == 0.0
        assert record.accel_min == record.accel_max == record.accel_mean == accel


def test_two_trajectories_population_std():
    batch = [make_trajectory([1.0, 3.0]), make_trajectory([2.0, 4.0])]
    first, second = compute_stats(batch)

    assert first.speed_mean == 1.5
    assert first.speed_std == 0.5
    assert first.speed_min == 1.0
    assert first.speed_max == 2.0
    assert first.speed_lower == 1.0
    assert first.speed_upper == 2.0

    assert second.speed_mean == 3.5
    assert second.speed_std == 0.5
    assert (second.speed_min, second.speed_max) == (3.0, 4.0)


def test_acceleration_bands():
    batch = [
        make_trajectory([0.0], accels=[2.0]),
        make_trajectory([0.0], accels=[4.0]),
        make_trajectory([0.0], accels=[9.0]),
    ]
    (record,) = compute_stats(batch)
    assert record.accel_mean == pytest.approx(5.0)
    assert record.accel_std == pytest.approx(np.sqrt(26.0 / 3.0))
    assert record.accel_lower == pytest.approx(5.0 - np.sqrt(26.0 / 3.0))
    assert (record.accel_min, record.accel_max) == (2.0, 9.0)


def test_magnitudes_not_signed_components():
    # speed is a norm, so opposite directions aggregate to the same value
    batch = [make_trajectory([-2.0]), make_trajectory([2.0])]
    (record,) = compute_stats(batch)
    assert record.speed_mean == 2.0
    assert record.speed_std == 0.0


def test_misaligned_batch_is_rejected():
    with pytest.raises(ValueError):
        compute_stats([make_trajectory([1.0, 2.0]), make_trajectory([1.0])])


@pytest.mark.parametrize("n_samples", [1, 2, 7])
def test_simulated_batches_aggregate(n_samples):
    for model in (LissajousModel(), LangevinModel()):
        batch = model.simulate(model.default_params(), 0.1, n_samples, rng=np.random.default_rng(3))
        stats = compute_stats(batch)
        assert len(stats) == len(batch[0])
        assert [r.t for r in stats] == list(batch[0].t)


def test_stochastic_bands_enclose_mean():
    model = LangevinModel()
    batch = model.simulate(model.default_params(), 0.1, 20, rng=np.random.default_rng(11))
    for record in compute_stats(batch)[1:]:
        assert record.speed_min <= record.speed_mean <= record.speed_max
        assert record.speed_lower <= record.speed_mean <= record.speed_upper
        assert record.speed_std >= 0.0


def test_closest_index():
    times = [0.0, 0.5, 1.0, 1.5]
    assert closest_index(times, 0.74) == 1
    assert closest_index(times, 0.75) == 1
    assert closest_index(times, 99.0) == 3
    assert closest_index([], 1.0) is None


def test_closest_record():
    stats = compute_stats([make_trajectory([1.0, 2.0, 3.0], dt=1.0)])
    assert closest_record(stats, 1.2).speed_mean == 2.0
    assert closest_record([], 1.2) is None


def test_xy_bounds_square_and_padded():
    trajectory = make_trajectory([1.0, 1.0, 1.0], dt=1.0)
    # x spans 1..3, y stays 0
    (x0, x1), (y0, y1) = xy_bounds([trajectory])
    assert (x0, x1) == pytest.approx((2.0 - 1.12, 2.0 + 1.12))
    assert (y0, y1) == pytest.approx((-1.12, 1.12))


def test_xy_bounds_single_point_uses_fixed_padding():
    trajectory = make_trajectory([0.0])
    assert xy_bounds([trajectory]) == ((-0.1, 0.1), (-0.1, 0.1))


def test_xy_bounds_without_data():
    assert xy_bounds([]) == ((-1.0, 1.0), (-1.0, 1.0))
