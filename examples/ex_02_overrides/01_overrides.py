"""Overrides: substitute one injectable for another per container.

Overrides are fixed when the container is created. A key can be redirected to
another key or to a literal value, and dependents observe the substitute.
Override chains that loop back on themselves are rejected when resolved.
"""

from __future__ import annotations

from lazywire import CircularOverrideError, Container, define, override

Place = define(lambda _resolve: "world", name="Place")
InternetPlace = define(lambda _resolve: "internet", name="InternetPlace")
Message = define(lambda place: f"hello {place}", dependencies=(Place,), name="Message")


def main() -> None:
    print(Container().resolve(Message))  # => hello world

    with_key = Container([override(Place, InternetPlace)])
    print(with_key.resolve(Message))  # => hello internet

    with_value = Container([override(Place).with_value("moon")])
    print(with_value.resolve(Message))  # => hello moon

    looping = Container(
        [
            override(Place, InternetPlace),
            override(InternetPlace, Place),
        ],
    )
    try:
        looping.resolve(Message)
    except CircularOverrideError as error:
        print(error)  # => Circular override dependencies: Place -> InternetPlace -> Place


if __name__ == "__main__":
    main()
