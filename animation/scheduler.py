"""Frame-driven timers.

The scheduler has no clock of its own: the frame loop calls advance(dt) and
every task whose deadline falls inside that window fires, earliest first.
Firing order for equal deadlines is insertion order. Callbacks may schedule
or cancel tasks; tasks scheduled from a callback can still fire within the
same advance() if their deadline is inside the window.
"""
import heapq
import itertools


class ScheduledTask:
    """Handle for a pending callback. Repeating when interval is set."""

    def __init__(self, deadline: float, callback, interval: float = None):
        self.deadline = deadline
        self.callback = callback
        self.interval = interval
        self.active = True

    def cancel(self):
        self.active = False

    def __repr__(self):
        state = 'active' if self.active else 'cancelled'
        return f"<ScheduledTask deadline={self.deadline:.3f} interval={self.interval} {state}>"


class Scheduler:
    def __init__(self):
        self.time = 0.0
        self._heap = []  # (deadline, seq, task)
        self._seq = itertools.count()

    def schedule(self, delay: float, callback, interval: float = None) -> ScheduledTask:
        """Run callback after `delay` seconds, then every `interval` seconds if given."""
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        if interval is not None and interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        task = ScheduledTask(self.time + delay, callback, interval)
        heapq.heappush(self._heap, (task.deadline, next(self._seq), task))
        return task

    def advance(self, dt: float):
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        end = self.time + dt
        while self._heap:
            deadline, _, task = self._heap[0]
            if not task.active:
                heapq.heappop(self._heap)
                continue
            if deadline > end:
                break
            heapq.heappop(self._heap)
            self.time = deadline
            if task.interval is not None:
                task.deadline = deadline + task.interval
                heapq.heappush(self._heap, (task.deadline, next(self._seq), task))
            else:
                task.active = False
            task.callback()
        self.time = end

    def cancel_all(self):
        for _, _, task in self._heap:
            task.active = False
        self._heap.clear()

    @property
    def pending(self) -> int:
        return sum(1 for _, _, task in self._heap if task.active)
