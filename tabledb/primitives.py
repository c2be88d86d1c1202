"""Thread synchronisation primitives and a demo that races threads through them."""

from __future__ import annotations

import argparse
import random
import sys
import threading
import time
from contextlib import contextmanager, nullcontext
from enum import Enum
from typing import Callable, ContextManager, Iterator, Optional, Sequence, TextIO

_FIRST_PRINTABLE = 32
_LAST_PRINTABLE = 126


class Monitor:
    """A lock built from a condition variable and a busy flag."""

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._locked = False

    def acquire(self) -> None:
        """Wait until the resource is free, then take it."""
        with self._condition:
            self._condition.wait_for(lambda: not self._locked)
            self._locked = True

    def release(self) -> None:
        """Free the resource and wake one waiting thread."""
        with self._condition:
            self._locked = False
            self._condition.notify()

    def __enter__(self) -> "Monitor":
        self.acquire()
        return self

    def __exit__(self, *args: object) -> None:
        self.release()


class SemaphoreSlim:
    """A counting semaphore built from a condition variable."""

    def __init__(self, initial_count: int) -> None:
        if initial_count < 0:
            raise ValueError("initial_count must not be negative")
        self._condition = threading.Condition()
        self._count = initial_count

    @property
    def count(self) -> int:
        """Number of currently available permits."""
        with self._condition:
            return self._count

    def acquire(self) -> None:
        """Wait for a free permit and take it."""
        with self._condition:
            self._condition.wait_for(lambda: self._count > 0)
            self._count -= 1

    def release(self) -> None:
        """Return a permit and wake one waiting thread."""
        with self._condition:
            self._count += 1
            self._condition.notify()

    def __enter__(self) -> "SemaphoreSlim":
        self.acquire()
        return self

    def __exit__(self, *args: object) -> None:
        self.release()


class SpinLock:
    """A lock that busy-waits on a test-and-set flag."""

    def __init__(self) -> None:
        self._flag = threading.Lock()

    def acquire(self) -> None:
        """Spin until the flag is taken."""
        while not self._flag.acquire(blocking=False):
            pass

    def release(self) -> None:
        """Clear the flag; raises RuntimeError if it is not set."""
        self._flag.release()

    def __enter__(self) -> "SpinLock":
        self.acquire()
        return self

    def __exit__(self, *args: object) -> None:
        self.release()


class SpinWait:
    """A spin lock that yields the processor between attempts."""

    def __init__(self) -> None:
        self._flag = threading.Lock()

    def acquire(self) -> None:
        """Spin until the flag is taken, yielding between attempts."""
        while not self._flag.acquire(blocking=False):
            time.sleep(0)

    def release(self) -> None:
        """Clear the flag; raises RuntimeError if it is not set."""
        self._flag.release()

    def __enter__(self) -> "SpinWait":
        self.acquire()
        return self

    def __exit__(self, *args: object) -> None:
        self.release()


class Kind(str, Enum):
    """Which synchronisation the demo uses."""

    NONE = "none"
    MUTEX = "mutex"
    SEMAPHORE = "semaphore"
    SEMAPHORE_SLIM = "semaphore-slim"
    MONITOR = "monitor"
    SPIN_LOCK = "spin-lock"
    SPIN_WAIT = "spin-wait"
    BARRIER = "barrier"


def random_chars(letter_count: int, rng: Optional[random.Random] = None) -> str:
    """Return ``letter_count`` random printable ASCII characters."""
    if letter_count < 0:
        raise ValueError("letter_count must not be negative")
    generator = rng if rng is not None else random.Random()
    return "".join(
        chr(generator.randint(_FIRST_PRINTABLE, _LAST_PRINTABLE))
        for _ in range(letter_count)
    )


def _guard_factory(kind: Kind, thread_count: int) -> Callable[[], ContextManager[object]]:
    if kind is Kind.NONE:
        return nullcontext
    if kind is Kind.BARRIER:
        barrier = threading.Barrier(thread_count)
        mutex = threading.Lock()

        @contextmanager
        def after_barrier() -> Iterator[None]:
            barrier.wait()
            with mutex:
                yield

        return after_barrier
    shared: ContextManager[object] = {
        Kind.MUTEX: threading.Lock,
        Kind.SEMAPHORE: lambda: threading.BoundedSemaphore(1),
        Kind.SEMAPHORE_SLIM: lambda: SemaphoreSlim(1),
        Kind.MONITOR: Monitor,
        Kind.SPIN_LOCK: SpinLock,
        Kind.SPIN_WAIT: SpinWait,
    }[kind]()
    return lambda: shared


def run_demo(
    kind: Kind | str,
    thread_count: int = 4,
    letter_count: int = 10,
    out: Optional[TextIO] = None,
) -> int:
    """Start threads that each print a random string under ``kind``.

    Writes one ``Thread <id>: <chars>`` line per thread and a final
    ``Time taken`` line, and returns the elapsed microseconds.
    """
    kind = Kind(kind)
    if thread_count < 1:
        raise ValueError("thread_count must be positive")
    if letter_count < 0:
        raise ValueError("letter_count must not be negative")
    stream = out if out is not None else sys.stdout
    guard = _guard_factory(kind, thread_count)

    def worker(thread_id: int) -> None:
        rng = random.Random()
        with guard():
            chars = random_chars(letter_count, rng)
            stream.write(f"Thread {thread_id}: {chars}\n")

    start = time.perf_counter()
    threads = [
        threading.Thread(target=worker, args=(thread_id,))
        for thread_id in range(thread_count)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    elapsed = int((time.perf_counter() - start) * 1_000_000)
    stream.write(f"Time taken: {elapsed} microseconds\n")
    return elapsed


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the demo for the chosen synchronisation kind."""
    parser = argparse.ArgumentParser(description="Race threads through a lock.")
    parser.add_argument(
        "kind", nargs="?", default=Kind.MUTEX.value, choices=[k.value for k in Kind]
    )
    parser.add_argument("--threads", type=int, default=4)
    parser.add_argument("--letters", type=int, default=10)
    args = parser.parse_args(argv)
    run_demo(args.kind, args.threads, args.letters, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())