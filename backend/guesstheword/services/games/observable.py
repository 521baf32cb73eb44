from typing import Any, Callable, List


class ObservableValue:
    """A value holder that notifies subscribed callbacks when it changes.

    Observers are called synchronously, in subscription order, with the new
    value. Setting an equal value does not notify unless forced.
    """

    def __init__(self, initial: Any = None):
        self._value = initial
        self._observers: List[Callable[[Any], None]] = []

    @property
    def value(self) -> Any:
        return self._value

    def set(self, value: Any, force: bool = False) -> None:
        if not force and value == self._value:
            return
        self._value = value
        for callback in list(self._observers):
            callback(value)

    def observe(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Subscribe callback; returns a function that unsubscribes it."""
        self._observers.append(callback)

        def _unsubscribe() -> None:
            try:
                self._observers.remove(callback)
            except ValueError:
                pass

        return _unsubscribe

    def map(self, fn: Callable[[Any], Any]) -> 'ObservableValue':
        """Derive a read-only view whose value is fn(source value)."""
        derived = ObservableValue(fn(self._value))
        self.observe(lambda v: derived.set(fn(v)))
        return derived

    def __repr__(self) -> str:
        return f"ObservableValue({self._value!r})"
