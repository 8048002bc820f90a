from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lazywire._internal.keys import Key


def _render_chain(chain: Sequence[Key[Any]]) -> str:
    return " -> ".join(key.name for key in chain)


class LazyWireError(Exception):
    """Represent a base class for all lazywire-specific failures.

    Catch this type when you want to handle any lazywire error path without
    matching each concrete exception class individually.
    """


class BindingNotFoundError(LazyWireError):
    """Signal that a key has no binding in the registry used by a container.

    Raised by ``Container.resolve`` when the requested key, an override target,
    or an explicit dependency was never defined through ``define``. Keys are
    normally only produced by ``define``, so this usually means a key minted
    by one ``Registry`` was resolved by a container backed by another.

    Typical fix is constructing the container with ``registry=`` pointing at
    the registry that defined the key.
    """

    def __init__(self, key: Key[Any]) -> None:
        self.key = key
        super().__init__(f"No binding registered for {key!r}.")


class CircularOverrideError(LazyWireError):
    """Signal an override chain that revisits a key.

    Raised by ``Container.resolve`` while following the override table, for
    example with ``A -> A2``, ``A2 -> A3`` and ``A3 -> A``. ``chain`` holds the
    visited keys followed by the repeated one.

    Typical fix is removing one of the overrides that closes the loop.
    """

    def __init__(self, chain: Sequence[Key[Any]]) -> None:
        self.chain = tuple(chain)
        super().__init__(f"Circular override dependencies: {_render_chain(self.chain)}")


class CircularDependencyError(LazyWireError):
    """Signal a factory that transitively requires its own key.

    Raised by ``Container.resolve`` when a key is requested again while it is
    still being constructed by the same container. ``chain`` lists the keys
    under construction, ending with the re-entered key.
    """

    def __init__(self, chain: Sequence[Key[Any]]) -> None:
        self.chain = tuple(chain)
        super().__init__(f"Circular dependency: {_render_chain(self.chain)}")


class DuplicateOverrideError(LazyWireError):
    """Signal two overrides of the same key with different targets.

    Raised by ``Container(...)`` at construction time. Silent last-wins
    resolution would hide configuration mistakes, so conflicting overrides are
    rejected. Repeating the exact same override is accepted.
    """

    def __init__(self, key: Key[Any], overriders: Sequence[Key[Any]]) -> None:
        self.key = key
        self.overriders = tuple(overriders)
        targets = ", ".join(repr(overrider) for overrider in self.overriders)
        super().__init__(f"{key!r} is overridden more than once: {targets}.")


class InvalidOverrideError(LazyWireError):
    """Signal an override whose target is not assignable to the overridden key.

    Raised by ``override(...)`` and ``OverrideBuilder.with_value`` when both
    sides declare ``provides`` types that are incompatible, or when a literal
    value is not an instance of the overridden key's ``provides`` type.
    """
