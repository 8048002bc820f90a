"""Quickstart: define injectables and resolve them through a container.

Each ``define`` call returns an opaque key. The container builds values the
first time a key is requested and hands back the same instance afterwards,
including to other factories that depend on it.
"""

from __future__ import annotations

from dataclasses import dataclass

from lazywire import Container, define


@dataclass(slots=True)
class A:
    foo: str


@dataclass(slots=True)
class B:
    a: A
    bar: str


@dataclass(slots=True)
class C:
    bagel: str


AKey = define(lambda _resolve: A(foo="a"), name="A")
BKey = define(lambda a: B(a=a, bar="b" + a.foo), dependencies=(AKey,), name="B")
CKey = define(lambda a, b: C(bagel="c" + a.foo + b.bar), dependencies=(AKey, BKey), name="C")


def main() -> None:
    container = Container()

    c = container.resolve(CKey)
    print(f"bagel={c.bagel}")  # => bagel=caba

    shared = container.resolve(BKey).a is container.resolve(AKey)
    print(f"shared_a={shared}")  # => shared_a=True

    print(f"memoized={container.resolve(CKey) is c}")  # => memoized=True

    other = Container()
    print(f"independent={other.resolve(AKey) is container.resolve(AKey)}")  # => independent=False


if __name__ == "__main__":
    main()
