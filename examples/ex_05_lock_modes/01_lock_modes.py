"""Lock modes for first-time construction.

Two threads resolve the same uncached key at the same moment. The factory
lingers for a short while so the second thread arrives before it returns:

1. Default ``LockMode.THREAD`` runs the factory once; the second thread waits
   on the key's lock and then reads the cached value.
2. ``LockMode.NONE`` skips locking, so both threads run the factory, but the
   first stored value wins and both threads still receive one instance.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from lazywire import Container, LockMode, ResolveFn, define


class Service:
    pass


def race(lock_mode: LockMode) -> tuple[int, bool]:
    calls: list[int] = []
    both_inside = threading.Event()

    def make_service(_resolve: ResolveFn) -> Service:
        calls.append(1)
        if len(calls) == 2:
            both_inside.set()
        # Returns early once a second call has entered, otherwise after 0.2s.
        both_inside.wait(timeout=0.2)
        return Service()

    key = define(make_service, name=f"Service[{lock_mode.value}]")
    container = Container(lock_mode=lock_mode)
    start = threading.Barrier(2)

    def resolve_after_start() -> Service:
        start.wait()
        return container.resolve(key)

    with ThreadPoolExecutor(max_workers=2) as executor:
        first, second = [executor.submit(resolve_after_start) for _ in range(2)]
        return len(calls), first.result() is second.result()


def main() -> None:
    thread_calls, thread_shared = race(LockMode.THREAD)
    print(f"thread=calls={thread_calls} shared={thread_shared}")  # => thread=calls=1 shared=True

    none_calls, none_shared = race(LockMode.NONE)
    print(f"none=calls={none_calls} shared={none_shared}")  # => none=calls=2 shared=True


if __name__ == "__main__":
    main()
