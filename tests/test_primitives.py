import io
import random
import re
import threading

import pytest

from tabledb.primitives import (
    Monitor,
    SemaphoreSlim,
    SpinLock,
    SpinWait,
    main,
    random_chars,
    run_demo,
)

LINE = re.compile(r"^Thread (\d+): (.*)$")
KINDS = [
    "none",
    "mutex",
    "semaphore",
    "semaphore-slim",
    "monitor",
    "spin-lock",
    "spin-wait",
    "barrier",
]


class _ScriptedRng:
    def __init__(self, values):
        self._values = iter(values)
        self.bounds = []

    def randint(self, low, high):
        self.bounds.append((low, high))
        return next(self._values)


def test_random_chars_length_and_range():
    text = random_chars(200, random.Random(1))
    assert len(text) == 200
    assert all(32 <= ord(char) <= 126 for char in text)


def test_random_chars_uses_printable_bounds_and_values():
    rng = _ScriptedRng([65, 66, 32, 126])
    assert random_chars(4, rng) == "AB ~"
    assert rng.bounds == [(32, 126)] * 4


def test_random_chars_zero_and_negative():
    assert random_chars(0) == ""
    with pytest.raises(ValueError):
        random_chars(-1)


@pytest.mark.parametrize("kind", KINDS)
def test_run_demo_output(kind):
    out = io.StringIO()
    elapsed = run_demo(kind, 4, 10, out)
    lines = out.getvalue().splitlines()
    assert len(lines) == 5
    assert lines[-1] == f"Time taken: {elapsed} microseconds"
    ids = set()
    for line in lines[:-1]:
        match = LINE.match(line)
        assert match is not None
        ids.add(int(match.group(1)))
        assert len(match.group(2)) == 10
    assert ids == {0, 1, 2, 3}


def test_run_demo_rejects_bad_arguments():
    with pytest.raises(ValueError):
        run_demo("bogus", 4, 10, io.StringIO())
    with pytest.raises(ValueError):
        run_demo("mutex", 0, 10, io.StringIO())
    with pytest.raises(ValueError):
        run_demo("mutex", 2, -1, io.StringIO())


def _max_concurrency(lock, threads=4, rounds=20):
    state = {"inside": 0, "max": 0}
    guard = threading.Lock()

    def work():
        for _ in range(rounds):
            with lock:
                with guard:
                    state["inside"] += 1
                    state["max"] = max(state["max"], state["inside"])
                with guard:
                    state["inside"] -= 1

    workers = [threading.Thread(target=work) for _ in range(threads)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    return state


@pytest.mark.parametrize(
    "factory", [Monitor, lambda: SemaphoreSlim(1), SpinLock, SpinWait]
)
def test_mutual_exclusion(factory):
    state = _max_concurrency(factory())
    assert state["max"] == 1
    assert state["inside"] == 0


@pytest.mark.parametrize(
    "factory", [Monitor, lambda: SemaphoreSlim(1), SpinLock, SpinWait]
)
def test_second_acquire_blocks_until_release(factory):
    lock = factory()
    lock.acquire()
    entered = []
    acquired = threading.Event()

    def contender():
        with lock as held:
            entered.append(held)
            acquired.set()

    thread = threading.Thread(target=contender)
    thread.start()
    assert not acquired.wait(0.1)
    assert entered == []
    lock.release()
    assert acquired.wait(5)
    thread.join(5)
    assert not thread.is_alive()
    assert entered == [lock]


def test_semaphore_slim_counts_permits():
    semaphore = SemaphoreSlim(2)
    semaphore.acquire()
    semaphore.acquire()
    assert semaphore.count == 0
    semaphore.release()
    assert semaphore.count == 1
    with semaphore:
        assert semaphore.count == 0
    assert semaphore.count == 1


def test_semaphore_slim_rejects_negative_count():
    with pytest.raises(ValueError):
        SemaphoreSlim(-1)


@pytest.mark.parametrize("factory", [SpinLock, SpinWait])
def test_spin_release_without_acquire_raises(factory):
    with pytest.raises(RuntimeError):
        factory().release()


def test_monitor_context_manager_reacquirable():
    monitor = Monitor()
    with monitor as held:
        assert held is monitor
    with monitor:
        state = _max_concurrency(Monitor(), threads=2, rounds=5)
    assert state["max"] == 1


def test_main_prints_threads(capsys):
    assert main(["spin-wait", "--threads", "3", "--letters", "5"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    assert lines[-1].startswith("Time taken: ")
    assert {int(LINE.match(line).group(1)) for line in lines[:-1]} == {0, 1, 2}