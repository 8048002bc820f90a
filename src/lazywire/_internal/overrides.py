from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Any, Generic, TypeGuard, TypeVar, overload

from lazywire._internal.keys import Key, Registry, default_registry
from lazywire.exceptions import InvalidOverrideError

T = TypeVar("T")


def _is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


@dataclass(frozen=True, slots=True)
class Override(Generic[T]):
    """Redirect resolution of ``overridden`` to ``overrider`` inside one container."""

    overridden: Key[T]
    overrider: Key[T]

    def __post_init__(self) -> None:
        _check_assignable(self.overridden, self.overrider)


def _check_assignable(overridden: Key[Any], overrider: Key[Any]) -> None:
    expected = overridden.provides
    actual = overrider.provides
    if not (_is_runtime_class(expected) and _is_runtime_class(actual)):
        return
    if not issubclass(actual, expected):
        msg = (
            f"Cannot override {overridden!r} with {overrider!r}: "
            f"{actual.__qualname__} is not a subclass of {expected.__qualname__}."
        )
        raise InvalidOverrideError(msg)


class OverrideBuilder(Generic[T]):
    """Build an ``Override`` for ``overridden`` from another key or a fixed value."""

    def __init__(self, overridden: Key[T], *, registry: Registry | None = None) -> None:
        self.overridden = overridden
        self._registry = registry if registry is not None else default_registry

    def with_other(self, overrider: Key[T]) -> Override[T]:
        """Resolve ``overrider`` whenever ``overridden`` is requested."""
        return Override(self.overridden, overrider)

    def with_value(self, value: T) -> Override[T]:
        """Resolve ``value`` whenever ``overridden`` is requested.

        A fresh key is defined in the builder's registry to hold the value,
        so containers resolving it must use the same registry.
        """
        expected = self.overridden.provides
        if _is_runtime_class(expected) and not isinstance(value, expected):
            msg = (
                f"Cannot override {self.overridden!r} with value {value!r}: "
                f"expected an instance of {expected.__qualname__}."
            )
            raise InvalidOverrideError(msg)

        overrider: Key[T] = self._registry.define(
            lambda _resolve: value,
            name=f"<explicit value overriding {self.overridden.name}>",
            provides=expected,
        )
        return Override(self.overridden, overrider)


@overload
def override(
    overridden: Key[T],
    overrider: None = None,
    *,
    registry: Registry | None = None,
) -> OverrideBuilder[T]: ...


@overload
def override(
    overridden: Key[T],
    overrider: Key[T],
    *,
    registry: Registry | None = None,
) -> Override[T]: ...


def override(
    overridden: Key[T],
    overrider: Key[T] | None = None,
    *,
    registry: Registry | None = None,
) -> Override[T] | OverrideBuilder[T]:
    """Create an override of ``overridden``.

    With two keys, return the ``Override`` edge directly. With one, return an
    ``OverrideBuilder`` to choose between another key and a literal value.

    Args:
        overridden: Key whose resolution is redirected.
        overrider: Key resolved in its place. Omit it to get a builder.
        registry: Registry that holds keys minted by ``with_value``. Pass the
            registry of the container the override is meant for when it is
            not the default one.

    Raises:
        InvalidOverrideError: If both keys declare ``provides`` types and the
            overrider's type is not a subclass of the overridden one.

    Examples:
        .. code-block:: python

            Container([override(Place, InternetPlace)])
            Container([override(Place).with_value("internet")])
            Container([override(Place, registry=r).with_value("moon")], registry=r)

    """
    if overrider is None:
        return OverrideBuilder(overridden, registry=registry)
    return Override(overridden, overrider)
