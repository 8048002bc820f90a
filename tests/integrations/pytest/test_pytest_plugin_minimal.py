from __future__ import annotations

from lazywire import Container, define

pytest_plugins = ["lazywire.integrations.pytest_plugin"]

Counter = define(lambda _resolve: {"count": 0}, name="Counter")


def test_default_overrides_are_empty(lazywire_overrides: list[object]) -> None:
    assert lazywire_overrides == []


def test_container_fixture_is_a_fresh_container(lazywire_container: Container) -> None:
    counter = lazywire_container.resolve(Counter)
    counter["count"] += 1

    assert counter["count"] == 1
    assert lazywire_container.overrides == {}


def test_cached_values_do_not_leak_between_tests(lazywire_container: Container) -> None:
    assert lazywire_container.resolve(Counter)["count"] == 0
