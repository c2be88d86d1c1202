"""The dining philosophers: threads sharing forks without deadlock."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from dataclasses import dataclass, field
from typing import Optional, Sequence, TextIO

_OUTPUT_LOCK = threading.Lock()


@dataclass
class Philosopher:
    """A philosopher who alternately thinks and eats with two shared forks."""

    id: int
    left_fork_id: int
    right_fork_id: int
    left_fork: threading.Lock
    right_fork: threading.Lock
    out: Optional[TextIO] = None
    think_time: float = 1.0
    eat_time: float = 2.0
    output_lock: threading.Lock = field(default=_OUTPUT_LOCK, repr=False)

    def _say(self, message: str) -> None:
        stream = self.out if self.out is not None else sys.stdout
        with self.output_lock:
            stream.write(f"Philosopher {self.id} {message}\n")
            stream.flush()

    def _forks_in_order(self) -> list[threading.Lock]:
        # Taking forks in a global order (by fork id) rules out deadlock.
        pairs = sorted(
            {
                self.left_fork_id: self.left_fork,
                self.right_fork_id: self.right_fork,
            }.items()
        )
        return [fork for _, fork in pairs]

    def _eat(self) -> None:
        forks = self._forks_in_order()
        for fork in forks:
            fork.acquire()
        try:
            self._say("is eating...")
            time.sleep(self.eat_time)
            self._say(f"released forks {self.left_fork_id} and {self.right_fork_id}")
        finally:
            for fork in reversed(forks):
                fork.release()

    def run(self, rounds: Optional[int] = None) -> None:
        """Think and eat ``rounds`` times, or forever when ``rounds`` is None."""
        if rounds is not None and rounds < 0:
            raise ValueError("rounds must not be negative")
        done = 0
        while rounds is None or done < rounds:
            self._say("is thinking...")
            time.sleep(self.think_time)
            self._eat()
            done += 1


def dine(
    count: int = 5,
    rounds: Optional[int] = None,
    think_time: float = 1.0,
    eat_time: float = 2.0,
    out: Optional[TextIO] = None,
) -> list[Philosopher]:
    """Seat ``count`` philosophers at a round table and let them dine.

    Philosopher ``i`` uses fork ``(i - 1) mod count`` on the left and fork
    ``i`` on the right. Returns the philosophers once every thread finishes.
    """
    if count < 2:
        raise ValueError("at least two philosophers are needed")
    if rounds is not None and rounds < 0:
        raise ValueError("rounds must not be negative")
    forks = [threading.Lock() for _ in range(count)]
    output_lock = threading.Lock()
    philosophers = [
        Philosopher(
            id=index,
            left_fork_id=(index + count - 1) % count,
            right_fork_id=index,
            left_fork=forks[(index + count - 1) % count],
            right_fork=forks[index],
            out=out,
            think_time=think_time,
            eat_time=eat_time,
            output_lock=output_lock,
        )
        for index in range(count)
    ]
    threads = [
        threading.Thread(target=philosopher.run, args=(rounds,))
        for philosopher in philosophers
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return philosophers


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the dining philosophers."""
    parser = argparse.ArgumentParser(description="Dining philosophers.")
    parser.add_argument("--count", type=int, default=5)
    parser.add_argument("--rounds", type=int, default=None)
    parser.add_argument("--think", type=float, default=1.0)
    parser.add_argument("--eat", type=float, default=2.0)
    args = parser.parse_args(argv)
    dine(args.count, args.rounds, args.think, args.eat, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())