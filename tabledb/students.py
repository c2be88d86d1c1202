"""Finding students to expel, with the work shared by several threads."""

from __future__ import annotations

import argparse
import queue
import random
import sys
import threading
import time
from dataclasses import dataclass
from typing import Optional, Sequence

SURNAMES = (
    "Иванов", "Смирнов", "Кузнецов", "Попов", "Васильев", "Петров", "Соколов",
    "Михайлов", "Новиков", "Фёдоров", "Морозов", "Волков", "Алексеев", "Лебедев",
    "Семёнов", "Егоров", "Павлов", "Козлов", "Степанов", "Николаев", "Орлов",
    "Андреев", "Макаров", "Никитин", "Захаров",
)

NAMES = (
    "Александр", "Данила", "Алексей", "Кирилл", "Сергей", "Никита", "Андрей",
    "Артём", "Дмитрий", "Иван", "Михаил", "Пётр", "Павел", "Егор", "Илья",
    "Матвей", "Константин", "Максим", "Виктор", "Григорий",
)


@dataclass(frozen=True)
class Student:
    """A student's full name, course (1-5) and number of debts."""

    name: str
    course: int
    debt: int


def generate_name(rng: Optional[random.Random] = None) -> str:
    """Return a random "surname name" pair."""
    generator = rng if rng is not None else random.Random()
    return f"{generator.choice(SURNAMES)} {generator.choice(NAMES)}"


def make_students(count: int, rng: Optional[random.Random] = None) -> list[Student]:
    """Create ``count`` students with random names, courses 1-5 and debts 0-10."""
    if count < 0:
        raise ValueError("count must not be negative")
    generator = rng if rng is not None else random.Random()
    return [
        Student(generate_name(generator), generator.randint(1, 5), generator.randint(0, 10))
        for _ in range(count)
    ]


def find_expelled(
    students: Sequence[Student], thread_count: int, course: int, debts: int
) -> list[str]:
    """Names of students above ``course`` with more than ``debts`` debts.

    The students are put on a shared queue that ``thread_count`` threads
    drain; the order of the result depends on scheduling.
    """
    if thread_count < 0:
        raise ValueError("thread_count must not be negative")
    pending: queue.Queue[Student] = queue.Queue()
    for student in students:
        pending.put(student)
    expelled: list[str] = []
    result_lock = threading.Lock()

    def worker() -> None:
        while True:
            try:
                student = pending.get_nowait()
            except queue.Empty:
                return
            if student.debt > debts and student.course > course:
                with result_lock:
                    expelled.append(student.name)

    threads = [threading.Thread(target=worker) for _ in range(thread_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return expelled


def _ask(prompt: str) -> int:
    return int(input(prompt))


def _timed(students: Sequence[Student], threads: int, course: int, debts: int):
    start = time.perf_counter()
    names = find_expelled(students, threads, course, debts)
    elapsed = int((time.perf_counter() - start) * 1_000_000)
    return names, elapsed


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Generate students and list those to expel, with and without threads."""
    parser = argparse.ArgumentParser(description="Find students to expel.")
    parser.add_argument("--students", type=int)
    parser.add_argument("--threads", type=int)
    parser.add_argument("--course", type=int)
    parser.add_argument("--debts", type=int)
    parser.add_argument("--seed", type=int)
    args = parser.parse_args(argv)

    count = args.students if args.students is not None else _ask("Enter amount of students: ")
    threads = args.threads if args.threads is not None else _ask("Enter amount of threads: ")
    course = args.course if args.course is not None else _ask("Enter course: ")
    debts = args.debts if args.debts is not None else _ask("Enter amount of debts: ")

    students = make_students(count, random.Random(args.seed))

    for label, thread_count in (("With multithreads", threads), ("Without multithreads", 1)):
        names, elapsed = _timed(students, thread_count, course, debts)
        print(f"{label}, time taken: {elapsed} microseconds")
        print("Students to expel:")
        for name in names:
            print(name)
    return 0


if __name__ == "__main__":
    sys.exit(main())