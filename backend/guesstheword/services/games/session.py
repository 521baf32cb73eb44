import enum
import logging
import random
import threading
from typing import Any, Callable, Dict, List, Optional

from .formatting import format_elapsed_time
from .observable import ObservableValue
from .timer import CountdownTimer
from .words import WORDS, shuffled_words

logger = logging.getLogger(__name__)

# Time when the game is over
DONE = 0
# Countdown time interval (ms)
ONE_SECOND = 1000
# Total time for the game (ms)
COUNTDOWN_TIME = 60000


class SessionState(str, enum.Enum):
    RUNNING = 'running'
    FINISHED = 'finished'
    DISPOSED = 'disposed'


class GameSession:
    """One play-through: the current word, the score and the countdown.

    The session starts running as soon as it is built. correct() and skip()
    move the score and advance to the next word; the countdown ends the game
    and raises the one-shot ``finished`` event, which the host consumes with
    acknowledge_finish(). dispose() releases the countdown; afterwards every
    operation is a no-op.

    When the word queue runs out it is refilled with a new shuffle of the
    same words, so running out of words never ends the game.

    Observable fields: ``word``, ``score``, ``remaining_time`` (seconds),
    ``remaining_time_formatted`` and ``finished``.
    """

    def __init__(
        self,
        session_code: Optional[str] = None,
        rng: Optional[random.Random] = None,
        spawn: Optional[Callable] = None,
        sleep: Optional[Callable[[float], None]] = None,
        heartbeat_sec: int = 0,
    ):
        self.session_code = session_code
        self._rng = rng or random.Random()
        self._lock = threading.RLock()
        self.state = SessionState.RUNNING
        self.words_played = 0

        self.word = ObservableValue('')
        self.score = ObservableValue(0)
        self.remaining_time = ObservableValue(COUNTDOWN_TIME // ONE_SECOND)
        self.remaining_time_formatted = self.remaining_time.map(format_elapsed_time)
        # Event which triggers the end of the game
        self.finished = ObservableValue(False)

        self._word_list: List[str] = []
        self._reset_list()
        self._next_word()

        self.timer = CountdownTimer(
            COUNTDOWN_TIME,
            ONE_SECOND,
            on_tick=self.tick,
            on_finish=self._on_timer_finish,
            spawn=spawn,
            sleep=sleep,
            heartbeat_sec=heartbeat_sec,
            name=session_code or 'session',
        )
        self.timer.start()
        logger.info(f"[session-created] session={session_code} word_count={len(WORDS)}")

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    def _reset_list(self) -> None:
        self._word_list = shuffled_words(self._rng)

    def _next_word(self) -> None:
        if not self._word_list:
            self._reset_list()
        # Every advance is a new word, even when a reshuffle repeats the last one
        self.word.set(self._word_list.pop(0), force=True)
        self.words_played += 1

    # Button presses

    def correct(self) -> None:
        with self._lock:
            if not self.running:
                return
            self.score.set(self.score.value + 1)
            self._next_word()

    def skip(self) -> None:
        with self._lock:
            if not self.running:
                return
            self.score.set(self.score.value - 1)
            self._next_word()

    # Countdown

    def tick(self, millis_until_finished: int) -> None:
        with self._lock:
            if not self.running:
                return
            seconds = max(DONE, int(millis_until_finished) // ONE_SECOND)
            self.remaining_time.set(seconds)
            if seconds == DONE:
                self._finish()

    def _on_timer_finish(self) -> None:
        self.tick(DONE)

    def _finish(self) -> None:
        self.remaining_time.set(DONE)
        self.state = SessionState.FINISHED
        self.timer.cancel()
        logger.info(f"[session-finished] session={self.session_code} score={self.score.value} words_played={self.words_played}")
        self.finished.set(True)

    def acknowledge_finish(self) -> None:
        """Mark the finish event as consumed."""
        with self._lock:
            if self.state is SessionState.DISPOSED:
                return
            self.finished.set(False)

    def dispose(self) -> None:
        with self._lock:
            if self.state is SessionState.DISPOSED:
                return
            # Cancel the timer so no tick outlives the session
            self.timer.cancel()
            self.state = SessionState.DISPOSED
            logger.info(f"[session-disposed] session={self.session_code}")

    def observe(self, callback: Callable[[str, Any], None]) -> Callable[[], None]:
        """Subscribe to every observable field; callback gets (field, value)."""
        fields = {
            'word': self.word,
            'score': self.score,
            'remaining_time': self.remaining_time,
            'remaining_time_formatted': self.remaining_time_formatted,
            'finished': self.finished,
        }
        unsubscribers = [
            observable.observe(lambda value, field=field: callback(field, value))
            for field, observable in fields.items()
        ]

        def _unsubscribe() -> None:
            for unsubscribe in unsubscribers:
                unsubscribe()

        return _unsubscribe

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {
                'session_code': self.session_code,
                'word': self.word.value,
                'score': self.score.value,
                'remaining_time': self.remaining_time.value,
                'remaining_time_formatted': self.remaining_time_formatted.value,
                'finished': self.finished.value,
                'state': self.state.value,
                'words_played': self.words_played,
            }
