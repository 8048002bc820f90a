from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar, TypeVar

from typing_extensions import Self

from lazywire._internal.keys import Binding, Key, Registry, default_registry
from lazywire._internal.lock_mode import LockMode
from lazywire._internal.overrides import Override
from lazywire._internal.resolution_stack import (
    cycle_chain,
    get_resolution_stack,
    is_under_construction,
)
from lazywire.exceptions import (
    CircularDependencyError,
    CircularOverrideError,
    DuplicateOverrideError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)
_MISSING_CACHE: Any = object()

SELF: Key[Container] = Key("Container.SELF")
"""Resolves to the container performing the resolution."""

PARENT: Key[Container | None] = Key("Container.PARENT")
"""Resolves to the parent container, or ``None`` for a root container."""


class Container:
    """Resolve keys to lazily constructed, memoized values.

    Each container owns an override table fixed at construction and an
    instance cache filled on first use. A factory runs at most once per
    container and key: later resolutions, including nested ones made while
    building other values, return the cached instance. Separate containers
    never share cached instances.

    Resolution of a key proceeds as follows:

    1. Follow the override table, failing with ``CircularOverrideError`` when
       the chain revisits a key.
    2. Return the container itself for ``SELF`` and the parent for ``PARENT``.
    3. Return the cached value when there is one.
    4. Otherwise build the value from the key's binding and cache it under
       the key the override chain landed on.

    Bindings defined with ``inherit=True`` resolve through the parent
    container when one is set.
    """

    SELF: ClassVar[Key[Container]] = SELF
    PARENT: ClassVar[Key[Container | None]] = PARENT

    def __init__(
        self,
        overrides: Iterable[Override[Any]] = (),
        *,
        parent: Container | None = None,
        lock_mode: LockMode = LockMode.THREAD,
        registry: Registry | None = None,
    ) -> None:
        """Initialize a container with its overrides and optional parent.

        Nothing is resolved eagerly.

        Args:
            overrides: Override edges applied to every resolution. Repeating an
                identical edge is allowed.
            parent: Container consulted by bindings defined with
                ``inherit=True``, and returned for ``PARENT``.
            lock_mode: Locking strategy for first-time construction.
                ``LockMode.THREAD`` guarantees single-flight construction per
                key across threads.
            registry: Registry used to look up bindings. Defaults to the
                process-wide registry used by ``define``.

        Raises:
            DuplicateOverrideError: If two overrides target the same key with
                different overriders.

        """
        self._overrides: Mapping[Key[Any], Key[Any]] = MappingProxyType(
            _build_override_table(overrides),
        )
        self._parent = parent
        self._lock_mode = lock_mode
        self._registry = registry if registry is not None else default_registry
        self._instances: dict[Key[Any], Any] = {}
        self._key_locks: dict[Key[Any], threading.Lock] = {}
        self._key_locks_lock = threading.Lock()
        logger.debug(
            "Created container with %d override(s), parent=%r, lock_mode=%s",
            len(self._overrides),
            parent,
            lock_mode.value,
        )

    @property
    def overrides(self) -> Mapping[Key[Any], Key[Any]]:
        """Read-only view of the override table."""
        return self._overrides

    @property
    def parent(self) -> Container | None:
        return self._parent

    @property
    def lock_mode(self) -> LockMode:
        return self._lock_mode

    def child(self, overrides: Iterable[Override[Any]] = ()) -> Self:
        """Create a container whose parent is this one.

        The child shares this container's lock mode and registry but has its
        own override table and instance cache.
        """
        return type(self)(
            overrides,
            parent=self,
            lock_mode=self._lock_mode,
            registry=self._registry,
        )

    def resolve(self, key: Key[T]) -> T:
        """Return the value for ``key``, constructing it on first use.

        Args:
            key: Key minted by ``define`` or one of ``SELF``/``PARENT``.

        Returns:
            The value cached for the key the override chain lands on.

        Raises:
            CircularOverrideError: If the override chain revisits a key.
            CircularDependencyError: If a factory requires a key that this
                container is still constructing.
            BindingNotFoundError: If the landed key has no binding.

        Notes:
            Exceptions raised by factories propagate unchanged. A failed
            construction caches nothing, so a later call retries it.

        Examples:
            .. code-block:: python

                container = Container([override(A).with_value({"foo": "A"})])
                container.resolve(B)["bar"]  # "bA"

        """
        target = self._follow_overrides(key)
        if target is SELF:
            return self  # type: ignore[return-value]
        if target is PARENT:
            return self._parent  # type: ignore[return-value]

        value = self._instances.get(target, _MISSING_CACHE)
        if value is not _MISSING_CACHE:
            return value
        return self._construct(target)

    def __contains__(self, key: object) -> bool:
        """Return whether a value for ``key`` is already cached in this container.

        Keys caught in an override loop are never cached, so they report
        ``False`` instead of raising.
        """
        if not isinstance(key, Key):
            return False
        try:
            target = self._follow_overrides(key)
        except CircularOverrideError:
            return False
        return target in self._instances

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(overrides={len(self._overrides)}, "
            f"cached={len(self._instances)}, has_parent={self._parent is not None})"
        )

    def _follow_overrides(self, key: Key[Any]) -> Key[Any]:
        chain: list[Key[Any]] = []
        visited: set[Key[Any]] = set()
        while key in self._overrides:
            if key in visited:
                raise CircularOverrideError([*chain, key])
            chain.append(key)
            visited.add(key)
            key = self._overrides[key]
        return key

    def _construct(self, key: Key[T]) -> T:
        stack = get_resolution_stack()
        if is_under_construction(stack, self, key):
            raise CircularDependencyError(cycle_chain(stack, self, key))

        binding = self._registry.lookup(key)

        if self._lock_mode is LockMode.NONE:
            return self._build_and_store(binding, stack)

        with self._get_key_lock(key):
            value = self._instances.get(key, _MISSING_CACHE)
            if value is not _MISSING_CACHE:
                return value
            return self._build_and_store(binding, stack)

    def _build_and_store(self, binding: Binding, stack: list[Any]) -> Any:
        stack.append((self, binding.key))
        try:
            value = self._build(binding)
        finally:
            stack.pop()
        # First stored value wins so every caller observes one instance
        return self._instances.setdefault(binding.key, value)

    def _build(self, binding: Binding) -> Any:
        if binding.inherit:
            parent = self.resolve(PARENT)
            if parent is not None:
                logger.debug("Delegating %r to parent %r", binding.key, parent)
                return parent.resolve(binding.key)

        logger.debug("Constructing %r", binding.key)
        if binding.dependencies is None:
            return binding.factory(self.resolve)
        return binding.factory(*[self.resolve(dependency) for dependency in binding.dependencies])

    def _get_key_lock(self, key: Key[Any]) -> threading.Lock:
        """Get or create the construction lock for ``key``.

        Uses double-checked locking to minimize lock contention.
        """
        lock = self._key_locks.get(key)
        if lock is None:
            with self._key_locks_lock:
                lock = self._key_locks.get(key)
                if lock is None:
                    lock = threading.Lock()
                    self._key_locks[key] = lock
        return lock


def _build_override_table(overrides: Iterable[Override[Any]]) -> dict[Key[Any], Key[Any]]:
    table: dict[Key[Any], Key[Any]] = {}
    for item in overrides:
        existing = table.get(item.overridden)
        if existing is None:
            table[item.overridden] = item.overrider
        elif existing is not item.overrider:
            raise DuplicateOverrideError(item.overridden, [existing, item.overrider])
    return table
