"""Unit tests for the in-memory sensor registry."""

from __future__ import annotations

import logging
import threading

from datastore.sensor_registry import SEED_SENSORS, SensorRegistry, build_default_registry
from models.records import Coordinate, Sensor
from settings import get_settings


def _sensor(name: str, x: float = 0.0, y: float = 0.0, tags: tuple[str, ...] = ()) -> Sensor:
    return Sensor(name=name, tags=tags, location=Coordinate(x, y))


def test_list_preserves_creation_order() -> None:
    registry = SensorRegistry()
    names = ["c", "a", "b", "a"]

    for name in names:
        registry.create(_sensor(name))

    assert [sensor.name for sensor in registry.list()] == names


def test_create_returns_stored_sensor_and_allows_duplicates() -> None:
    registry = SensorRegistry()
    first = _sensor("dup", 1.0, 1.0)
    second = _sensor("dup", 2.0, 2.0)

    assert registry.create(first) == first
    assert registry.create(second) == second
    assert len(registry) == 2


def test_list_returns_snapshot() -> None:
    registry = SensorRegistry([_sensor("a")])

    snapshot = registry.list()
    registry.create(_sensor("b"))

    assert [sensor.name for sensor in snapshot] == ["a"]


def test_get_by_name_after_create() -> None:
    registry = SensorRegistry()
    sensor = _sensor("probe", 4.0, 2.0, ("outdoor",))
    registry.create(sensor)

    assert registry.get_by_name("probe") == sensor


def test_get_by_name_missing_returns_none() -> None:
    registry = SensorRegistry([_sensor("probe")])

    assert registry.get_by_name("never-created") is None


def test_get_by_name_returns_first_duplicate() -> None:
    registry = SensorRegistry([_sensor("dup", 1.0, 1.0), _sensor("dup", 2.0, 2.0)])

    found = registry.get_by_name("dup")

    assert found is not None
    assert found.location == Coordinate(1.0, 1.0)


def test_update_changes_tags_and_location_only() -> None:
    registry = SensorRegistry([_sensor("probe", 1.0, 1.0, ("old",)), _sensor("other")])

    assert registry.update("probe", ["new", "tags"], Coordinate(5.0, 6.0)) is True

    updated = registry.get_by_name("probe")
    assert updated == Sensor(name="probe", tags=("new", "tags"), location=Coordinate(5.0, 6.0))
    assert [sensor.name for sensor in registry.list()] == ["probe", "other"]


def test_update_is_idempotent() -> None:
    registry = SensorRegistry([_sensor("probe", 1.0, 1.0)])

    registry.update("probe", ["t"], Coordinate(2.0, 3.0))
    after_first = registry.list()
    assert registry.update("probe", ["t"], Coordinate(2.0, 3.0)) is True

    assert registry.list() == after_first


def test_update_only_touches_first_duplicate() -> None:
    registry = SensorRegistry([_sensor("dup", 1.0, 1.0), _sensor("dup", 2.0, 2.0)])

    registry.update("dup", ["changed"], Coordinate(9.0, 9.0))

    first, second = registry.list()
    assert first.tags == ("changed",)
    assert first.location == Coordinate(9.0, 9.0)
    assert second == _sensor("dup", 2.0, 2.0)


def test_update_missing_leaves_registry_unchanged() -> None:
    registry = SensorRegistry([_sensor("a"), _sensor("b")])
    before = registry.list()

    assert registry.update("missing", ["x"], Coordinate(1.0, 1.0)) is False
    assert registry.list() == before


def test_delete_removes_every_match_and_keeps_order() -> None:
    registry = SensorRegistry(
        [_sensor("a"), _sensor("dup"), _sensor("b"), _sensor("dup"), _sensor("c")]
    )

    assert registry.delete("dup") is True
    assert [sensor.name for sensor in registry.list()] == ["a", "b", "c"]
    assert registry.delete("dup") is False


def test_delete_missing_returns_false() -> None:
    registry = SensorRegistry([_sensor("a")])

    assert registry.delete("missing") is False
    assert len(registry) == 1


def test_find_nearest_empty_iff_registry_empty() -> None:
    registry = SensorRegistry()
    assert registry.find_nearest(Coordinate(0.0, 0.0)) is None

    registry.create(_sensor("only", 10.0, 10.0))
    assert registry.find_nearest(Coordinate(0.0, 0.0)) == _sensor("only", 10.0, 10.0)

    registry.delete("only")
    assert registry.find_nearest(Coordinate(0.0, 0.0)) is None


def test_find_nearest_on_seed_data() -> None:
    registry = SensorRegistry(SEED_SENSORS)

    exact = registry.find_nearest(Coordinate(0.0, 0.0))
    near = registry.find_nearest(Coordinate(100.0, 50.0))

    assert exact is not None and exact.name == "Sensor_1"
    assert near is not None and near.name == "Sensor_2"


def test_round_trip_reflects_update_once() -> None:
    registry = SensorRegistry()
    registry.create(_sensor("probe", 1.0, 1.0, ("a",)))

    assert registry.get_by_name("probe") == _sensor("probe", 1.0, 1.0, ("a",))
    registry.update("probe", ["b"], Coordinate(2.0, 2.0))

    assert registry.get_by_name("probe") == _sensor("probe", 2.0, 2.0, ("b",))
    assert len(registry) == 1


def test_reset_replaces_contents() -> None:
    registry = SensorRegistry([_sensor("a")])

    registry.reset([_sensor("b"), _sensor("c")])

    assert [sensor.name for sensor in registry.list()] == ["b", "c"]


def test_concurrent_creates_are_not_lost() -> None:
    registry = SensorRegistry()

    def worker(prefix: str) -> None:
        for index in range(200):
            registry.create(_sensor(f"{prefix}-{index}"))

    threads = [threading.Thread(target=worker, args=(f"t{n}",)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry) == 800


def test_mutations_are_logged(caplog) -> None:
    registry = SensorRegistry()

    with caplog.at_level(logging.INFO, logger="datastore.sensor_registry"):
        registry.create(_sensor("probe"))
        registry.delete("probe")

    records = [r for r in caplog.records if r.name == "datastore.sensor_registry"]
    messages = [record.getMessage() for record in records]
    assert "Sensor created" in messages
    assert "Sensor deleted" in messages
    assert all(getattr(record, "sensor_name", None) == "probe" for record in records)


def test_build_default_registry_seeds_by_default(monkeypatch) -> None:
    monkeypatch.delenv("SENSOR_REGISTRY_SEED", raising=False)
    get_settings.cache_clear()
    build_default_registry.cache_clear()
    try:
        registry = build_default_registry()
        assert registry.list() == list(SEED_SENSORS)
        assert build_default_registry() is registry
    finally:
        build_default_registry.cache_clear()
        get_settings.cache_clear()


def test_build_default_registry_without_seed(monkeypatch) -> None:
    monkeypatch.setenv("SENSOR_REGISTRY_SEED", "false")
    get_settings.cache_clear()
    build_default_registry.cache_clear()
    try:
        registry = build_default_registry()
        assert len(registry) == 0
        assert build_default_registry() is registry
    finally:
        build_default_registry.cache_clear()
        get_settings.cache_clear()
