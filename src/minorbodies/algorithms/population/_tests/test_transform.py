import numpy as np
import pytest

from minorbodies import config
from minorbodies.algorithms.core.elements import TWO_PI
from minorbodies.algorithms.population import AsteroidGroup, TransformSettings
from minorbodies.errors import PreconditionViolation


def _append(group, a, e, m0=0.0, n=0.0):
    group.expand_capacity(1)
    group.append_orbiting(f"a={a}", 15.0, (a, e, 0.1, 0.2, 0.3, m0, n))


def test_two_row_population_after_reload(registry, orbiting, unit_settings):
    _append(orbiting, 1.0, 0.1)
    _append(orbiting, 2.0, 0.2)

    fresh = AsteroidGroup(registry, "Sun", "fresh")
    fresh.deserialize(orbiting.serialize())
    assert fresh.transform(unit_settings) == 2

    assert fresh.max_apoapsis == pytest.approx(2.4, rel=1e-6)
    np.testing.assert_allclose(fresh.element("mean_motion"), [1.0, np.sqrt(1.0 / 8.0)], rtol=1e-6)
    assert orbiting.transformed_count == 0


def test_mean_anomaly_is_rephased_to_reference_epoch(orbiting):
    _append(orbiting, 1.0, 0.0, m0=0.0, n=1.0)
    orbiting.transform(TransformSettings(epoch_offset_days=6655.5))

    m = float(orbiting.element("mean_anomaly_at_epoch")[0])
    assert m == pytest.approx((-6655.5) % TWO_PI, abs=1e-5)
    assert 0.0 <= m < TWO_PI


def test_default_settings_come_from_config(orbiting, monkeypatch):
    monkeypatch.setattr(config, "EPOCH_OFFSET_DAYS", 100.0)
    monkeypatch.setattr(config, "LENGTH_UNIT_SCALE", 3.0)
    _append(orbiting, 1.0, 0.0, m0=1.0, n=0.25)
    orbiting.transform()

    assert orbiting.element("semi_major_axis")[0] == np.float32(3.0)
    m = float(orbiting.element("mean_anomaly_at_epoch")[0])
    assert m == pytest.approx((1.0 - 25.0) % TWO_PI, abs=1e-6)


def test_explicit_mean_motion_is_kept(orbiting, unit_settings):
    _append(orbiting, 4.0, 0.0, n=0.5)
    orbiting.transform(unit_settings)
    assert orbiting.element("mean_motion")[0] == np.float32(0.5)


def test_mean_motion_uses_scaled_axis(orbiting):
    _append(orbiting, 1.0, 0.0)
    orbiting.transform(TransformSettings(length_scale=4.0))

    assert orbiting.element("semi_major_axis")[0] == np.float32(4.0)
    assert orbiting.element("mean_motion")[0] == pytest.approx(1.0 / 8.0, rel=1e-6)


def test_all_mean_anomalies_stay_in_range(orbiting, fill_orbiting):
    fill_orbiting(orbiting, 200)
    orbiting.transform(TransformSettings(epoch_offset_days=6655.5))

    m = orbiting.element("mean_anomaly_at_epoch")
    assert np.all(m >= 0.0)
    assert np.all(m < TWO_PI)


def test_max_apoapsis_is_the_row_maximum(orbiting, fill_orbiting, unit_settings):
    fill_orbiting(orbiting, 50)
    orbiting.transform(unit_settings)
    assert orbiting.max_apoapsis == orbiting.apoapses().max()


def test_second_transform_is_a_no_op(orbiting, fill_orbiting):
    fill_orbiting(orbiting, 5)
    settings = TransformSettings(length_scale=2.0, epoch_offset_days=10.0)
    assert orbiting.transform(settings) == 5
    before = orbiting.elements_4.copy(), orbiting.elements_3.copy(), orbiting.max_apoapsis

    assert orbiting.transform(settings) == 0

    np.testing.assert_array_equal(orbiting.elements_4, before[0])
    np.testing.assert_array_equal(orbiting.elements_3, before[1])
    assert orbiting.max_apoapsis == before[2]


def test_only_new_rows_are_transformed(orbiting):
    settings = TransformSettings(length_scale=2.0)
    _append(orbiting, 1.0, 0.5)
    orbiting.transform(settings)
    assert orbiting.max_apoapsis == pytest.approx(3.0)

    _append(orbiting, 1.0, 0.0)
    assert orbiting.transform(settings) == 1
    np.testing.assert_array_equal(orbiting.element("semi_major_axis"), np.float32([2.0, 2.0]))
    assert orbiting.transformed_count == 2


def test_max_apoapsis_never_decreases(orbiting, unit_settings):
    _append(orbiting, 3.0, 0.0)
    orbiting.transform(unit_settings)
    assert orbiting.max_apoapsis == pytest.approx(3.0)

    _append(orbiting, 1.0, 0.0)
    orbiting.transform(unit_settings)
    assert orbiting.max_apoapsis == pytest.approx(3.0)

    _append(orbiting, 5.0, 0.1)
    orbiting.transform(unit_settings)
    assert orbiting.max_apoapsis == pytest.approx(5.5)


def test_degenerate_rows_do_not_raise(orbiting):
    _append(orbiting, 0.0, 0.0)
    _append(orbiting, np.nan, 0.1)
    _append(orbiting, 2.0, 0.0)
    orbiting.transform(TransformSettings(epoch_offset_days=1.0))

    n = orbiting.element("mean_motion")
    assert np.isinf(n[0])
    assert np.isnan(n[1])
    assert np.isnan(orbiting.element("mean_anomaly_at_epoch")[0])
    # NaN apoapses never win the running maximum
    assert orbiting.max_apoapsis == pytest.approx(2.0)


def test_unknown_primary_fails_before_mutation(registry, orbiting, fill_orbiting, unit_settings):
    fill_orbiting(orbiting, 3)
    before = orbiting.elements_3.copy()
    registry.remove("Sun")

    with pytest.raises(PreconditionViolation):
        orbiting.transform(unit_settings)

    np.testing.assert_array_equal(orbiting.elements_3, before)
    assert orbiting.transformed_count == 0


def test_co_orbital_transform(co_orbital, fill_co_orbital):
    fill_co_orbital(co_orbital, 30)
    raw = co_orbital.elements_3.copy()
    raw_4 = co_orbital.elements_4.copy()

    assert co_orbital.transform(TransformSettings(length_scale=2.0), rng=np.random.default_rng(3)) == 30

    np.testing.assert_array_equal(co_orbital.element("radial_offset"), raw[:, 0] * np.float32(2.0))
    np.testing.assert_array_equal(co_orbital.elements_3[:, 1:], raw[:, 1:])
    np.testing.assert_array_equal(co_orbital.elements_4, raw_4)

    theta = co_orbital.element("libration_angle")
    assert np.all(theta >= 0.0)
    assert np.all(theta < TWO_PI)
    np.testing.assert_array_equal(co_orbital.elements_2[:, 1], 0.0)


def test_co_orbital_apoapsis_uses_point_distance(co_orbital, unit_settings):
    co_orbital.expand_capacity(2)
    co_orbital.append_co_orbital("near", 10.0, (0.1, 0.0, 0.0, 0.0), (0.0, 0.2, 1e-4, 0.0))
    co_orbital.append_co_orbital("far", 10.0, (0.0, 0.0, 0.0, 0.0), (0.5, 0.2, 1e-4, 0.0))
    co_orbital.transform(unit_settings, rng=np.random.default_rng(0))

    assert co_orbital.reference_distance() == pytest.approx(5.0)
    assert co_orbital.max_apoapsis == pytest.approx(5.5, rel=1e-6)
    assert co_orbital.max_apoapsis == pytest.approx(co_orbital.apoapses().max())


def test_libration_angles_follow_the_generator(registry, fill_co_orbital, unit_settings):
    groups = []
    for _ in range(2):
        group = AsteroidGroup(registry, "Sun", "t", is_co_orbital=True, co_orbital_point="L4")
        fill_co_orbital(group, 10)
        group.transform(unit_settings, rng=np.random.default_rng(7))
        groups.append(group)
    np.testing.assert_array_equal(groups[0].elements_2, groups[1].elements_2)

    other = AsteroidGroup(registry, "Sun", "t", is_co_orbital=True, co_orbital_point="L4")
    fill_co_orbital(other, 10)
    other.transform(unit_settings, rng=np.random.default_rng(8))
    assert not np.array_equal(other.elements_2, groups[0].elements_2)


def test_settings_from_config_overrides(monkeypatch):
    monkeypatch.setattr(config, "LENGTH_UNIT_SCALE", 2.0)
    settings = TransformSettings.from_config(debug=True)
    assert settings.length_scale == 2.0
    assert settings.epoch_offset_days == config.EPOCH_OFFSET_DAYS
    assert settings.debug
