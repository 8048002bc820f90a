"""Shared pytest fixtures for lazywire tests."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any

import pytest

from lazywire import SELF, Container, Key, Registry, define


@dataclass(frozen=True)
class Graph:
    """Keys of the A/B/C graph: B depends on A, C depends on A, B and the container."""

    a: Key[dict[str, Any]]
    a2: Key[dict[str, Any]]
    a3: Key[dict[str, Any]]
    optional_a: Key[dict[str, Any] | None]
    b: Key[dict[str, Any]]
    c: Key[dict[str, Any]]
    calls: Counter[str]


@pytest.fixture()
def container() -> Container:
    """Container with no overrides backed by the process-wide registry."""
    return Container()


@pytest.fixture()
def registry() -> Registry:
    """Isolated registry for tests that inspect registry state."""
    return Registry()


@pytest.fixture()
def graph() -> Graph:
    """Freshly defined A/B/C graph counting factory invocations by name."""
    calls: Counter[str] = Counter()

    def make_a(foo: str) -> Any:
        def factory(_resolve: Any) -> dict[str, Any]:
            calls[foo] += 1
            return {"foo": foo}

        return factory

    a = define(make_a("a"), name="A")
    a2 = define(make_a("a2"), name="A2")
    a3 = define(make_a("a3"), name="A3")
    optional_a: Key[dict[str, Any] | None] = define(lambda _resolve: None, name="OptionalA")

    def make_b(a_value: dict[str, Any]) -> dict[str, Any]:
        calls["b"] += 1
        return {"a": a_value, "bar": "b" + a_value["foo"]}

    b = define(make_b, dependencies=(a,), name="B")

    def make_c(
        a_value: dict[str, Any],
        b_value: dict[str, Any],
        injector: Container,
        maybe_a: dict[str, Any] | None,
    ) -> dict[str, Any]:
        calls["c"] += 1
        return {
            "bagel": "c" + a_value["foo"] + b_value["bar"],
            "injector": injector,
            "has_optional_a": maybe_a is not None,
        }

    c = define(make_c, dependencies=(a, b, SELF, optional_a), name="C")
    return Graph(a=a, a2=a2, a3=a3, optional_a=optional_a, b=b, c=c, calls=calls)
