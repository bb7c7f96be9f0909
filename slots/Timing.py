import heapq
import itertools
import logging
import random

from slots.Cards import SYMBOLS

logger = logging.getLogger(__name__)

SPIN_MS = 500
SPIN_TICK_MS = 60
BOMB_DELAY_MS = 1800


class Scheduler:
    """
    One-shot timers on the event loop that drives the game.
    after() returns an opaque handle that cancel() accepts.
    """

    def after(self, delayMs, callback):
        raise NotImplementedError

    def cancel(self, handle):
        raise NotImplementedError


class TkScheduler(Scheduler):
    def __init__(self, widget):
        self.widget = widget

    def after(self, delayMs, callback):
        return self.widget.after(int(delayMs), callback)

    def cancel(self, handle):
        self.widget.after_cancel(handle)


class ManualScheduler(Scheduler):
    """
    A virtual clock. Nothing fires until advance() or runUntilIdle() is called,
    which makes timed sequences deterministic.
    """

    def __init__(self):
        self.now = 0
        self._heap = []
        self._live = {}
        self._ids = itertools.count(1)

    def after(self, delayMs, callback):
        handle = next(self._ids)
        due = self.now + max(0, delayMs)
        self._live[handle] = (due, callback)
        heapq.heappush(self._heap, (due, handle))
        return handle

    def cancel(self, handle):
        self._live.pop(handle, None)

    def pending(self):
        return len(self._live)

    def dueTime(self, handle):
        entry = self._live.get(handle)
        if entry is None:
            return None
        return entry[0]

    def _popDue(self, limit):
        while self._heap:
            due, handle = self._heap[0]
            if handle not in self._live:
                heapq.heappop(self._heap)
                continue
            if limit is not None and due > limit:
                return None
            heapq.heappop(self._heap)
            return due, self._live.pop(handle)[1]
        return None

    def advance(self, ms):
        target = self.now + ms
        fired = 0
        while True:
            nxt = self._popDue(target)
            if nxt is None:
                break
            self.now, callback = nxt
            callback()
            fired += 1
        self.now = target
        return fired

    def runUntilIdle(self, maxCallbacks=10000):
        fired = 0
        while fired < maxCallbacks:
            nxt = self._popDue(None)
            if nxt is None:
                break
            self.now, callback = nxt
            callback()
            fired += 1
        return fired


class SpinCoordinator:
    """
    Schedules the slot-style spin of grid cells and the bomb hold.
    It only knows cell indices and callbacks; the game state stays with the caller.
    """

    def __init__(self, scheduler, rng=None, onChange=None, gridSize=9,
                 tickMs=SPIN_TICK_MS, spinMs=SPIN_MS):
        self.scheduler = scheduler
        self.rng = rng or random.Random()
        self.onChange = onChange
        self.tickMs = tickMs
        self.spinMs = spinMs
        self.overrides = [None] * gridSize
        self.spinCells = ()
        self.spinInterval = None
        self.spinTimeout = None
        self.holdTimer = None

    def isSpinning(self):
        return self.spinTimeout is not None

    def isHolding(self):
        return self.holdTimer is not None

    def stopSpinTimers(self):
        if self.spinInterval is not None:
            self.scheduler.cancel(self.spinInterval)
            self.spinInterval = None
        if self.spinTimeout is not None:
            self.scheduler.cancel(self.spinTimeout)
            self.spinTimeout = None

    def spin(self, indices, commit):
        # a new spin supersedes the running one
        self.stopSpinTimers()
        self.__clearOverrides()
        self.spinCells = tuple(indices)
        logger.debug("spinning cells %s", self.spinCells)
        self.__randomize()
        self.spinInterval = self.scheduler.after(self.tickMs, self.__tick)
        self.spinTimeout = self.scheduler.after(self.spinMs, lambda: self.__finish(commit))

    def hold(self, delayMs, callback):
        """
        One-shot delay. Returns False without scheduling anything if a hold is
        already pending.
        """
        if self.holdTimer is not None:
            return False

        def fire():
            self.holdTimer = None
            callback()

        self.holdTimer = self.scheduler.after(delayMs, fire)
        logger.debug("hold scheduled for %d ms", delayMs)
        return True

    def cancelAll(self):
        self.stopSpinTimers()
        if self.holdTimer is not None:
            self.scheduler.cancel(self.holdTimer)
            self.holdTimer = None
        self.__clearOverrides()

    def randomSymbol(self):
        return self.rng.choice(SYMBOLS)

    def __randomize(self):
        for i in self.spinCells:
            self.overrides[i] = self.randomSymbol()
        self.__changed()

    def __tick(self):
        self.spinInterval = self.scheduler.after(self.tickMs, self.__tick)
        self.__randomize()

    def __finish(self, commit):
        self.spinTimeout = None
        self.stopSpinTimers()
        self.__clearOverrides()
        self.__changed()
        commit()

    def __clearOverrides(self):
        for i in self.spinCells:
            self.overrides[i] = None
        self.spinCells = ()

    def __changed(self):
        if self.onChange is not None:
            self.onChange()
