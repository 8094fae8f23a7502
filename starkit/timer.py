"""Millisecond timer queue ordered by expiry time, plus a small demo command."""

from __future__ import annotations

import argparse
import bisect
import itertools
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Optional


@dataclass(frozen=True)
class TimerNode:
    """A scheduled callback; identified by its expiry tick and id."""

    expire: int
    id: int
    func: Optional[Callable[["TimerNode"], object]] = field(
        default=None, compare=False, repr=False
    )

    @property
    def key(self) -> tuple[int, int]:
        return (self.expire, self.id)


class Timer:
    """Set of timers ordered by expiry, then by id."""

    _ids: ClassVar[itertools.count] = itertools.count(1)
    _id_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._keys: list[tuple[int, int]] = []
        self._nodes: dict[tuple[int, int], TimerNode] = {}

    @staticmethod
    def gen_id() -> int:
        """Return a new process-wide timer id."""
        with Timer._id_lock:
            return next(Timer._ids)

    @staticmethod
    def get_tick() -> int:
        """Current monotonic time in milliseconds."""
        return time.monotonic_ns() // 1_000_000

    def add_timer(self, msec: int, func: Callable[[TimerNode], object]) -> TimerNode:
        """Schedule ``func`` to run ``msec`` milliseconds from now."""
        node = TimerNode(self.get_tick() + msec, self.gen_id(), func)
        bisect.insort(self._keys, node.key)
        self._nodes[node.key] = node
        return node

    def del_timer(self, node: TimerNode) -> bool:
        """Remove a pending timer; return False if it is not pending."""
        key = (node.expire, node.id)
        if self._nodes.pop(key, None) is None:
            return False
        self._keys.pop(bisect.bisect_left(self._keys, key))
        return True

    def check_timer(self) -> bool:
        """Run the earliest timer if it is due; return whether one ran."""
        if not self._keys or self._keys[0][0] > self.get_tick():
            return False
        key = self._keys.pop(0)
        node = self._nodes.pop(key)
        if node.func is not None:
            node.func(node)
        return True

    def time_to_sleep(self) -> int:
        """Milliseconds until the next timer is due: -1 if none, 0 if overdue."""
        if not self._keys:
            return -1
        return max(self._keys[0][0] - self.get_tick(), 0)

    def __len__(self) -> int:
        return len(self._keys)


def main(argv: list[str] | None = None) -> int:
    """Schedule a few demo timers, cancel one, and run until all have fired."""
    parser = argparse.ArgumentParser(description="Run a short timer demonstration.")
    parser.parse_args(argv)

    timer = Timer()
    fired = itertools.count(1)

    def report(node: TimerNode) -> None:
        print(f"now time:{Timer.get_tick()}\n\t", end="")
        print(f"node id={node.id} revoked times:{next(fired)}", flush=True)

    timer.add_timer(1000, report)
    timer.add_timer(1000, report)
    timer.add_timer(3000, report)
    cancelled = timer.add_timer(2000, report)
    timer.del_timer(cancelled)

    print(f"now time:{Timer.get_tick()}", flush=True)

    while len(timer):
        wait = timer.time_to_sleep()
        if wait > 0:
            time.sleep(wait / 1000)
        while timer.check_timer():
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())