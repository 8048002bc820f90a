"""Errors: what lazywire rejects and how failures propagate.

Configuration mistakes surface as ``LazyWireError`` subclasses with messages
naming the keys involved. Exceptions raised by factories propagate unchanged
and are never cached, so the next resolution retries construction.
"""

from __future__ import annotations

from lazywire import (
    BindingNotFoundError,
    CircularDependencyError,
    Container,
    DuplicateOverrideError,
    InvalidOverrideError,
    Registry,
    ResolveFn,
    define,
    override,
)

Chicken = define(lambda resolve: resolve(Egg), name="Chicken")
Egg = define(lambda resolve: resolve(Chicken), name="Egg")

Place = define(lambda _resolve: "world", name="Place")
Moon = define(lambda _resolve: "moon", name="Moon")
Mars = define(lambda _resolve: "mars", name="Mars")

Port = define(lambda _resolve: 8080, name="Port", provides=int)

Orphan = Registry().define(lambda _resolve: "unreachable", name="Orphan")

_attempts: list[int] = []


def _flaky_connection(_resolve: ResolveFn) -> str:
    _attempts.append(len(_attempts) + 1)
    if len(_attempts) == 1:
        msg = "database is still starting"
        raise ConnectionError(msg)
    return "connected"


Connection = define(_flaky_connection, name="Connection")


def main() -> None:
    container = Container()

    try:
        container.resolve(Chicken)
    except CircularDependencyError as error:
        print(error)  # => Circular dependency: Chicken -> Egg -> Chicken

    try:
        container.resolve(Orphan)
    except BindingNotFoundError as error:
        print(error)  # => No binding registered for Key('Orphan').

    try:
        Container([override(Place, Moon), override(Place, Mars)])
    except DuplicateOverrideError as error:
        print(error)  # => Key('Place') is overridden more than once: Key('Moon'), Key('Mars').

    try:
        override(Port).with_value("eighty")
    except InvalidOverrideError as error:
        print(error)  # => Cannot override Key('Port') with value 'eighty': expected an instance of int.

    try:
        container.resolve(Connection)
    except ConnectionError as error:
        print(f"first_attempt_failed={error}")  # => first_attempt_failed=database is still starting

    print(f"retry={container.resolve(Connection)} attempts={len(_attempts)}")  # => retry=connected attempts=2


if __name__ == "__main__":
    main()
