"""Method advice: publish channels before and after an object's method runs."""

import functools
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Tuple, Union

from publisher.factory import create_publisher
from publisher.observability import get_logger

_logger = get_logger("publisher.advice")


class AdvisedMethod:
    """
    Wrapper state for one method of one object: the original callable and the
    channels published around it. Stored on the wrapper as `__advice__` so the
    method is wrapped at most once, whichever advisor touches it.

    Each channel is kept with the publisher of the advisor that registered it;
    None stands for the default publisher.
    """

    def __init__(self, target: Any, name: str, original: Callable[..., Any]) -> None:
        self.target = target
        self.name = name
        self.original = original
        self._before: List[Tuple[str, Any]] = []
        self._after: List[Tuple[str, Any]] = []
        self.wrapper = self._build_wrapper()

    @property
    def before_channels(self) -> List[str]:
        return [channel for channel, _ in self._before]

    @property
    def after_channels(self) -> List[str]:
        return [channel for channel, _ in self._after]

    def add_before(self, channel: str, publisher: Any = None) -> None:
        self._before.append((channel, publisher))

    def add_after(self, channel: str, publisher: Any = None) -> None:
        self._after.append((channel, publisher))

    @staticmethod
    def _publish(publisher: Any, channel: str, *args: Any, **kwargs: Any) -> Any:
        # default publisher is resolved per call so a replaced registry is honoured
        if publisher is None:
            publisher = create_publisher
        return publisher.publish(channel, *args, **kwargs)

    def _build_wrapper(self) -> Callable[..., Any]:
        advised = self
        original = self.original
        target = self.target

        @functools.wraps(original)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            for channel, publisher in list(advised._before):
                advised._publish(publisher, channel, *args, target, **kwargs)
            result = original(*args, **kwargs)
            for channel, publisher in list(advised._after):
                advised._publish(publisher, channel, result, target)
            return result

        wrapper.__advice__ = advised
        return wrapper

    @property
    def installed(self) -> bool:
        return getattr(self.target, self.name, None) is self.wrapper

    def restore(self) -> None:
        """Put the original method back and drop all advice channels."""
        if self.installed:
            setattr(self.target, self.name, self.original)
        self._before.clear()
        self._after.clear()
        _logger.debug("restored", extra={"method": self.name})

    def __repr__(self) -> str:
        return (
            f"AdvisedMethod(name={self.name!r}, before={self.before_channels!r}, "
            f"after={self.after_channels!r})"
        )


class Advisor:
    """Chainable before/after registration for the methods of one object."""

    def __init__(self, target: Any, publisher: Any = None) -> None:
        self._target = target
        self._publisher = publisher

    @property
    def target(self) -> Any:
        return self._target

    def advised(self, method: str) -> Optional[AdvisedMethod]:
        """Return the AdvisedMethod for `method` on this target, if wrapped."""
        current = getattr(self._target, method, None)
        advice = getattr(current, "__advice__", None)
        if isinstance(advice, AdvisedMethod) and advice.target is self._target:
            return advice
        return None

    def _advise(self, method: str, channel: Optional[str]) -> AdvisedMethod:
        if not isinstance(channel, str):
            raise TypeError(f"advice channel for {method!r} must be str, got {type(channel).__name__}")
        advice = self.advised(method)
        if advice is not None:
            return advice
        original = getattr(self._target, method)
        if not callable(original):
            raise TypeError(f"{type(self._target).__name__}.{method} is not callable")
        advice = AdvisedMethod(self._target, method, original)
        setattr(self._target, method, advice.wrapper)
        _logger.debug("advised", extra={"method": method, "target": type(self._target).__name__})
        return advice

    def before(self, method: Union[str, Mapping], channel: Optional[str] = None) -> "Advisor":
        """Publish `channel` with (*args, target) before each call of `method`."""
        if isinstance(method, Mapping):
            for name, ch in method.items():
                self.before(name, ch)
            return self
        self._advise(method, channel).add_before(channel, self._publisher)
        return self

    def after(self, method: Union[str, Mapping], channel: Optional[str] = None) -> "Advisor":
        """Publish `channel` with (return_value, target) after each call of `method`."""
        if isinstance(method, Mapping):
            for name, ch in method.items():
                self.after(name, ch)
            return self
        self._advise(method, channel).add_after(channel, self._publisher)
        return self

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(target={type(self._target).__name__})"


def advise(target: Any, publisher: Any = None) -> Advisor:
    """Return an Advisor for `target`; channels go to the default publisher unless one is given."""
    return Advisor(target, publisher)
