"""Decorator form and the ``SELF`` key.

``define`` works as a decorator: the decorated function becomes the factory
and its name is replaced by the new key. Factories that need to pick keys at
runtime can receive the resolving container through ``SELF``.
"""

from __future__ import annotations

from dataclasses import dataclass

from lazywire import SELF, Container, ResolveFn, define, override


@dataclass(slots=True)
class Database:
    dsn: str


@define
def settings(_resolve: ResolveFn) -> dict[str, str]:
    return {"dsn": "sqlite:///app.db", "mode": "primary"}


@define(dependencies=(settings,), name="Database")
def database(config: dict[str, str]) -> Database:
    return Database(dsn=config["dsn"])


@define(dependencies=(settings, SELF))
def router(config: dict[str, str], container: Container) -> str:
    if config["mode"] == "primary":
        return f"routing to {container.resolve(database).dsn}"
    return "routing to replica"


def main() -> None:
    print(repr(settings))  # => Key('settings')
    print(repr(database))  # => Key('Database')

    container = Container()
    print(container.resolve(router))  # => routing to sqlite:///app.db
    print(f"self={container.resolve(SELF) is container}")  # => self=True

    replica = Container([override(settings).with_value({"dsn": "-", "mode": "replica"})])
    print(replica.resolve(router))  # => routing to replica


if __name__ == "__main__":
    main()
