import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class CountdownTimer:
    """Countdown that reports the time left every interval until it runs out.

    Time only moves through advance(). When a spawn function is given (for
    example socketio.start_background_task), start() launches a worker that
    sleeps one interval at a time and advances the countdown; otherwise the
    owner drives it by calling advance() itself, which is how simulated time
    works in tests.

    on_tick receives the milliseconds left and is called once per elapsed
    interval while time remains; on_finish is called once when the countdown
    reaches zero. Nothing is delivered after cancel().
    """

    def __init__(
        self,
        millis_in_future: int,
        countdown_interval: int,
        on_tick: Callable[[int], None],
        on_finish: Callable[[], None],
        spawn: Optional[Callable] = None,
        sleep: Optional[Callable[[float], None]] = None,
        heartbeat_sec: int = 0,
        name: str = 'countdown',
    ):
        if countdown_interval <= 0:
            raise ValueError('countdown_interval must be positive')
        self._total = int(millis_in_future)
        self._interval = int(countdown_interval)
        self._on_tick = on_tick
        self._on_finish = on_finish
        self._spawn = spawn
        self._sleep = sleep
        self._heartbeat_ms = max(0, int(heartbeat_sec or 0)) * 1000
        self.name = name
        self._elapsed = 0
        self._pending = 0
        self._started = False
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed(self) -> int:
        return self._elapsed

    @property
    def millis_until_finished(self) -> int:
        return max(0, self._total - self._elapsed)

    def start(self) -> 'CountdownTimer':
        if self._started:
            raise RuntimeError(f"timer {self.name} already started")
        self._started = True
        self._running = True
        logger.info(f"[timer-start] timer={self.name} duration={self._total}ms interval={self._interval}ms")
        if self._spawn is not None:
            self._spawn(self._worker)
        return self

    def cancel(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info(f"[timer-cancel] timer={self.name} remaining={self.millis_until_finished}ms")

    def advance(self, millis: int) -> None:
        """Let millis of time pass, delivering any ticks that fall due."""
        if not self._running:
            return
        self._pending += int(millis)
        while self._running:
            step = min(self._interval, self._total - self._elapsed)
            if self._pending < step:
                return
            self._pending -= step
            self._elapsed += step
            remaining = self._total - self._elapsed
            if self._heartbeat_ms and self._elapsed % self._heartbeat_ms == 0:
                logger.info(f"[timer-heartbeat] timer={self.name} remaining={remaining // 1000}s")
            if remaining <= 0:
                self._running = False
                self._on_finish()
                return
            self._on_tick(remaining)

    def _worker(self) -> None:
        sleep = self._sleep or time.sleep
        while self._running:
            sleep(self._interval / 1000.0)
            self.advance(self._interval)
