from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Literal, Protocol, TypeVar, overload

from lazywire.exceptions import BindingNotFoundError

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
A1 = TypeVar("A1")
A2 = TypeVar("A2")
A3 = TypeVar("A3")
A4 = TypeVar("A4")

logger = logging.getLogger(__name__)


class Key(Generic[T_co]):
    """Opaque token that resolves to a value of type ``T_co``.

    Keys compare by identity only. Two keys created with the same ``name`` are
    still distinct; the name is used for error messages and ``repr`` and never
    takes part in resolution.

    ``provides`` optionally records the runtime type of the resolved value so
    that overrides can be checked for assignability when they are built.
    """

    __slots__ = ("name", "provides")

    def __init__(self, name: str, *, provides: type[Any] | None = None) -> None:
        self.name = name
        self.provides = provides

    def __repr__(self) -> str:
        return f"Key({self.name!r})"


class ResolveFn(Protocol):
    """Callable handed to resolver-style factories to pull other keys."""

    def __call__(self, key: Key[T]) -> T: ...


@dataclass(frozen=True, slots=True)
class Binding:
    """Registered recipe for constructing the value of one key.

    ``dependencies`` is ``None`` for resolver-style factories, which receive a
    ``ResolveFn``. Otherwise the listed keys are resolved in order and passed
    positionally.
    """

    key: Key[Any]
    factory: Callable[..., Any]
    dependencies: tuple[Key[Any], ...] | None = None
    inherit: bool = False
    """Ask the parent container first, when the resolving container has one."""


class Registry:
    """Append-only association of keys with their bindings.

    Bindings are added by ``define`` and never replaced or removed. Writes are
    serialized with a lock; reads go straight to the underlying dict.
    """

    def __init__(self) -> None:
        self._bindings: dict[Key[Any], Binding] = {}
        self._lock = threading.Lock()

    def define(
        self,
        factory: Callable[..., Any] | None = None,
        *,
        dependencies: Sequence[Key[Any]] | None = None,
        name: str | None = None,
        provides: type[Any] | None = None,
        inherit: bool = False,
    ) -> Any:
        """Mint a new key and record how to build its value.

        Args:
            factory: Callable producing the value. Without ``dependencies`` it
                receives a ``ResolveFn``; with them it receives the resolved
                dependency values positionally. Omit it to use decorator form.
            dependencies: Keys resolved in order and passed to ``factory``.
            name: Diagnostic name, defaults to the factory's ``__name__``.
            provides: Runtime type of the value, used to validate overrides.
            inherit: Delegate to the parent container when there is one.

        Returns:
            The new ``Key``, or a decorator returning it when ``factory`` is
            omitted.

        Examples:
            .. code-block:: python

                Settings = registry.define(lambda resolve: {"dsn": "sqlite://"}, name="Settings")


                @registry.define(dependencies=[Settings])
                def Database(settings: dict[str, str]) -> Database: ...

        """
        if factory is None:

            def decorator(func: Callable[..., Any]) -> Key[Any]:
                return self.define(
                    func,
                    dependencies=dependencies,
                    name=name,
                    provides=provides,
                    inherit=inherit,
                )

            return decorator

        key: Key[Any] = Key(
            name if name is not None else getattr(factory, "__name__", repr(factory)),
            provides=provides,
        )
        binding = Binding(
            key=key,
            factory=factory,
            dependencies=tuple(dependencies) if dependencies is not None else None,
            inherit=inherit,
        )
        with self._lock:
            self._bindings[key] = binding
        logger.debug("Defined %r (dependencies=%s, inherit=%s)", key, binding.dependencies, inherit)
        return key

    def lookup(self, key: Key[Any]) -> Binding:
        """Return the binding recorded for ``key``.

        Raises:
            BindingNotFoundError: If ``key`` was not defined by this registry.

        """
        binding = self._bindings.get(key)
        if binding is None:
            raise BindingNotFoundError(key)
        return binding

    def __contains__(self, key: object) -> bool:
        return key in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)


default_registry = Registry()
"""Process-wide registry used by ``define`` and by containers by default."""


@overload
def define(
    factory: Callable[[ResolveFn], T],
    *,
    dependencies: None = None,
    name: str | None = None,
    provides: type[Any] | None = None,
    inherit: bool = False,
) -> Key[T]: ...


@overload
def define(
    factory: Callable[[], T],
    *,
    dependencies: tuple[()],
    name: str | None = None,
    provides: type[Any] | None = None,
    inherit: bool = False,
) -> Key[T]: ...


@overload
def define(
    factory: Callable[[A1], T],
    *,
    dependencies: tuple[Key[A1]],
    name: str | None = None,
    provides: type[Any] | None = None,
    inherit: bool = False,
) -> Key[T]: ...


@overload
def define(
    factory: Callable[[A1, A2], T],
    *,
    dependencies: tuple[Key[A1], Key[A2]],
    name: str | None = None,
    provides: type[Any] | None = None,
    inherit: bool = False,
) -> Key[T]: ...


@overload
def define(
    factory: Callable[[A1, A2, A3], T],
    *,
    dependencies: tuple[Key[A1], Key[A2], Key[A3]],
    name: str | None = None,
    provides: type[Any] | None = None,
    inherit: bool = False,
) -> Key[T]: ...


@overload
def define(
    factory: Callable[[A1, A2, A3, A4], T],
    *,
    dependencies: tuple[Key[A1], Key[A2], Key[A3], Key[A4]],
    name: str | None = None,
    provides: type[Any] | None = None,
    inherit: bool = False,
) -> Key[T]: ...


@overload
def define(
    factory: Callable[..., T],
    *,
    dependencies: Sequence[Key[Any]],
    name: str | None = None,
    provides: type[Any] | None = None,
    inherit: bool = False,
) -> Key[T]: ...


@overload
def define(
    factory: Literal[None] = None,
    *,
    dependencies: Sequence[Key[Any]] | None = None,
    name: str | None = None,
    provides: type[Any] | None = None,
    inherit: bool = False,
) -> Callable[[Callable[..., T]], Key[T]]: ...


def define(
    factory: Callable[..., Any] | None = None,
    *,
    dependencies: Sequence[Key[Any]] | None = None,
    name: str | None = None,
    provides: type[Any] | None = None,
    inherit: bool = False,
) -> Any:
    """Define an injectable in the process-wide registry.

    Thin wrapper over ``default_registry.define``. Tuples passed as
    ``dependencies`` are checked against the factory signature by type
    checkers for up to four dependencies; longer or dynamic lists fall back to
    an untyped sequence checked only at call time.

    Args:
        factory: Callable producing the value, or omitted for decorator form.
        dependencies: Keys resolved in order and passed to ``factory``.
        name: Diagnostic name, defaults to the factory's ``__name__``.
        provides: Runtime type of the value, used to validate overrides.
        inherit: Delegate to the parent container when there is one.

    Examples:
        .. code-block:: python

            A = define(lambda resolve: {"foo": "a"}, name="A")
            B = define(lambda a: {"bar": "b" + a["foo"]}, dependencies=(A,), name="B")

    """
    return default_registry.define(
        factory,
        dependencies=dependencies,
        name=name,
        provides=provides,
        inherit=inherit,
    )
