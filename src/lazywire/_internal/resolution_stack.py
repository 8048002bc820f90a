from __future__ import annotations

import asyncio
import threading
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from lazywire._internal.container import Container
    from lazywire._internal.keys import Key

Frame: TypeAlias = "tuple[Container, Key[Any]]"
"""A key being constructed by a specific container."""

# Stores (owner_id, stack) so a thread or task that inherited the context gets its own copy
_resolution_stack: ContextVar[tuple[tuple[int, int | None], list[Frame]] | None] = ContextVar(
    "lazywire_resolution_stack",
    default=None,
)


def _get_context_id() -> tuple[int, int | None]:
    """Identify the current thread and, when running inside one, the current async task."""
    try:
        task = asyncio.current_task()
    except RuntimeError:
        task = None
    return threading.get_ident(), id(task) if task is not None else None


def get_resolution_stack() -> list[Frame]:
    """Return the frames under construction in the current execution context.

    When called from a different thread or async task than the one that
    created the stack, returns a cloned copy so parallel resolutions never
    observe each other's frames.
    """
    context_id = _get_context_id()
    stored = _resolution_stack.get()

    if stored is None:
        stack: list[Frame] = []
        _resolution_stack.set((context_id, stack))
        return stack

    owner_id, stack = stored
    if owner_id != context_id:
        cloned_stack = list(stack)
        _resolution_stack.set((context_id, cloned_stack))
        return cloned_stack

    return stack


def is_under_construction(stack: list[Frame], container: Container, key: Key[Any]) -> bool:
    return any(owner is container and pending is key for owner, pending in stack)


def cycle_chain(stack: list[Frame], container: Container, key: Key[Any]) -> list[Key[Any]]:
    """Return the keys ``container`` is constructing from the first ``key`` frame, closed by ``key``."""
    start = next(
        index for index, (owner, pending) in enumerate(stack) if owner is container and pending is key
    )
    return [pending for owner, pending in stack[start:] if owner is container] + [key]
