from __future__ import annotations

import contextvars
import threading

from lazywire._internal.container import Container
from lazywire._internal.keys import Key
from lazywire._internal.resolution_stack import (
    cycle_chain,
    get_resolution_stack,
    is_under_construction,
)


def test_stack_is_reused_within_context() -> None:
    def run() -> bool:
        return get_resolution_stack() is get_resolution_stack()

    assert contextvars.copy_context().run(run)


def test_stack_is_cloned_for_other_thread() -> None:
    """A thread running in a copied context gets its own stack."""
    container = Container()
    key: Key[int] = Key("Pending")
    seen: list[list[object]] = []

    def inner() -> None:
        stack = get_resolution_stack()
        seen.append(list(stack))
        stack.append((container, Key("Other")))

    def outer() -> list[object]:
        stack = get_resolution_stack()
        stack.append((container, key))
        context = contextvars.copy_context()
        thread = threading.Thread(target=context.run, args=(inner,))
        thread.start()
        thread.join()
        return list(stack)

    outer_stack = contextvars.copy_context().run(outer)

    assert seen == [[(container, key)]]
    assert outer_stack == [(container, key)]


def test_under_construction_is_scoped_to_container() -> None:
    first = Container()
    second = Container()
    key: Key[int] = Key("Pending")
    stack = [(first, key)]

    assert is_under_construction(stack, first, key)
    assert not is_under_construction(stack, second, key)
    assert not is_under_construction(stack, first, Key("Pending"))


def test_cycle_chain_skips_other_containers() -> None:
    first = Container()
    second = Container()
    a: Key[int] = Key("A")
    b: Key[int] = Key("B")
    c: Key[int] = Key("C")
    stack = [(first, a), (first, b), (second, a), (first, c)]

    chain = cycle_chain(stack, first, b)

    assert [key.name for key in chain] == ["B", "C", "B"]
