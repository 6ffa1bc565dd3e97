"""Stochastic Langevin model: integration scheme, smoothing and independence."""
import numpy as np
import pytest

from trajectorytuner.model.sampling import normal_random
from trajectorytuner.trajectories.langevin import LangevinModel


@pytest.fixture
def model() -> LangevinModel:
    return LangevinModel()


@pytest.fixture
def params(model):
    return model.default_params()


def test_defaults(model, params):
    assert params == {"gamma": 0.5, "omega": 1.0, "sigma": 0.3, "alpha": 0.1, "duration": 20.0}
    assert model.IS_STOCHASTIC is True


@pytest.mark.parametrize("duration, expected", [(20.0, 20.0), (0.0, 0.0), (-3.0, 0.0)])
def test_plot_time(model, params, duration, expected):
    params["duration"] = duration
    assert model.get_plot_time(params) == expected


def test_degenerate_horizon_gives_empty_batch(model, params, rng):
    params["duration"] = 0.0
    assert model.simulate(params, 0.02, 5, rng=rng) == []


def test_batch_shape(model, params, rng):
    batch = model.simulate(params, 0.125, n_samples=5, rng=rng)
    assert len(batch) == 5
    # 20 s at 0.125 s: 160 steps plus the initial rest sample
    assert {len(trajectory) for trajectory in batch} == {161}
    for trajectory in batch:
        np.testing.assert_array_equal(trajectory.t, batch[0].t)


def test_starts_at_rest(model, params, rng):
    first = model.simulate(params, 0.1, rng=rng)[0][0]
    assert first.t == 0.0
    assert (first.x, first.y, first.z, first.speed, first.accel) == (0.0, 0.0, 0.0, 0.0, 0.0)


def test_last_time_clamped_to_horizon(model, params, rng):
    params["duration"] = 1.0
    trajectory = model.simulate(params, 0.3, rng=rng)[0]
    assert len(trajectory) == 4
    assert trajectory.t[-1] <= 1.0


def test_realizations_are_independent(model, params, rng):
    batch = model.simulate(params, 0.05, n_samples=3, rng=rng)
    assert not np.allclose(batch[0].position, batch[1].position)
    assert not np.allclose(batch[1].velocity, batch[2].velocity)


def test_axes_are_independent(model, params, rng):
    trajectory = model.simulate(params, 0.05, rng=rng)[0]
    assert not np.allclose(trajectory.position[:, 0], trajectory.position[:, 1])


def test_same_seed_reproduces_run(model, params):
    first = model.simulate(params, 0.05, 4, rng=np.random.default_rng(7))
    second = model.simulate(params, 0.05, 4, rng=np.random.default_rng(7))
    for a, b in zip(first, second):
        np.testing.assert_array_equal(a.position, b.position)
        np.testing.assert_array_equal(a.accel, b.accel)


def test_zero_noise_is_deterministic(model, params):
    params["sigma"] = 0.0
    first = model.simulate(params, 0.05, 3)
    second = model.simulate(params, 0.05, 3)
    for trajectory in first + second:
        np.testing.assert_array_equal(trajectory.velocity, first[0].velocity)
        np.testing.assert_array_equal(trajectory.position, first[0].position)
    # Starting at rest without forcing, the oscillator never moves
    assert not first[0].speed.any()


def test_first_step_follows_euler_maruyama(model, params):
    dt = 0.1
    params.update(gamma=0.7, omega=1.3, sigma=0.9, alpha=0.25)
    trajectory = model.simulate(params, dt, rng=np.random.default_rng(99))[0]

    z = normal_random(np.random.default_rng(99), (1, 3))[0]
    v_raw = params["sigma"] * np.sqrt(dt) * z
    v = params["alpha"] * v_raw
    np.testing.assert_allclose(trajectory.velocity[1], v)
    np.testing.assert_allclose(trajectory.position[1], v * dt)
    np.testing.assert_allclose(trajectory.acceleration[1], v / dt)


def test_second_step_uses_raw_state(model, params):
    dt = 0.1
    gamma, omega, sigma, alpha = 0.7, 1.3, 0.9, 0.25
    params.update(gamma=gamma, omega=omega, sigma=sigma, alpha=alpha)
    trajectory = model.simulate(params, dt, rng=np.random.default_rng(5))[0]

    draws = np.random.default_rng(5)
    z1 = normal_random(draws, (1, 3))[0]
    z2 = normal_random(draws, (1, 3))[0]

    v_raw1 = sigma * np.sqrt(dt) * z1
    x_raw1 = v_raw1 * dt
    v1 = alpha * v_raw1
    v_raw2 = v_raw1 + (-gamma * v_raw1 - omega ** 2 * x_raw1) * dt + sigma * np.sqrt(dt) * z2
    v2 = alpha * v_raw2 + (1 - alpha) * v1

    np.testing.assert_allclose(trajectory.velocity[2], v2)
    np.testing.assert_allclose(trajectory.position[2], v1 * dt + v2 * dt)


def test_no_smoothing_tracks_raw_dynamics(model, params, rng):
    params["alpha"] = 1.0
    dt = 0.05
    trajectory = model.simulate(params, dt, rng=rng)[0]
    np.testing.assert_allclose(np.diff(trajectory.position, axis=0), trajectory.velocity[1:] * dt, atol=1e-12)


def test_acceleration_is_velocity_difference(model, params, rng):
    dt = 0.05
    trajectory = model.simulate(params, dt, rng=rng)[0]
    np.testing.assert_allclose(trajectory.acceleration[1:], np.diff(trajectory.velocity, axis=0) / dt)
    np.testing.assert_allclose(trajectory.accel, np.linalg.norm(trajectory.acceleration, axis=1))
    np.testing.assert_allclose(trajectory.speed, np.linalg.norm(trajectory.velocity, axis=1))


def test_evaluate_is_not_available(model, params):
    with pytest.raises(NotImplementedError):
        model.evaluate(1.0, params)


def test_never_singular(model, params):
    assert model.has_singularity(params) is False
    params["sigma"] = 2.0
    assert model.has_singularity(params) is False


def test_command_format(model, params):
    assert model.get_command(params) == "mc_raptor intref langevin 0.5 1 0.3 0.1 20"


def test_nan_parameter_propagates(model, params, rng):
    params["gamma"] = float("nan")
    trajectory = model.simulate(params, 0.1, rng=rng)[0]
    assert np.isnan(trajectory.speed[-1])
