"""Parent containers: opt-in delegation with ``inherit=True``.

Bindings defined with ``inherit=True`` ask the parent container for their
value whenever the resolving container has one. The parent applies its own
overrides, so a child can redirect a key while the parent decides how the
redirected value is built.
"""

from __future__ import annotations

from lazywire import PARENT, Container, define, override

Place = define(lambda _resolve: "world", name="Place", inherit=True)
InternetPlace = define(lambda _resolve: "internet", name="InternetPlace", inherit=True)
Message = define(
    lambda place: f"hello {place}",
    dependencies=(Place,),
    name="Message",
    inherit=True,
)
WholesomeMessage = define(
    lambda place: f"what a beautiful {place}",
    dependencies=(Place,),
    name="WholesomeMessage",
    inherit=True,
)


def main() -> None:
    print(Container().resolve(Message))  # => hello world

    parent = Container([override(Place, InternetPlace)])
    child = parent.child([override(Message, WholesomeMessage)])

    print(parent.resolve(Message))  # => hello internet
    print(child.resolve(Message))  # => what a beautiful internet

    print(f"child_parent_is_parent={child.resolve(PARENT) is parent}")  # => child_parent_is_parent=True
    print(f"root_parent={parent.resolve(PARENT)}")  # => root_parent=None


if __name__ == "__main__":
    main()
