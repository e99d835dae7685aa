"""Currying with placeholders.

A curried function collects positional arguments over any number of calls and
invokes the wrapped function once it holds `arity` real arguments:

    def adder(x, y, z):
        return x + y + z

    curried_adder = curry(adder)
    curried_adder(1)          # no invocation
    curried_adder(1, 2)       # no invocation
    curried_adder(1, 2, 3)    # 6
    curried_adder(1, 2)(3)    # 6
    curried_adder(1)(2)(3)    # 6

The placeholder `__` reserves a position to be filled by a later call:

    curried_adder(__, 2, 3)('a')  # adder('a', 2, 3)
"""

import copy
import functools
import inspect
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar

from typing_extensions import TypeGuard, final

import clamda.arity
import clamda.logging

_F = TypeVar('_F', bound=Callable)

_logger = clamda.logging.get_logger(__name__)

__all__ = [
    'ArityError',
    'Curried',
    'CurryError',
    'Placeholder',
    '__',
    'combine',
    'count_args',
    'curry',
    'curry_n',
    'defcurry',
    'is_placeholder',
    'placeholder',
]


class CurryError(TypeError):
    pass


class ArityError(CurryError):
    """A curried function was saturated with arguments its target can't take."""

    def __init__(self, name: str, count: int, reason: str) -> None:
        super().__init__(f'{name} invoked with {count} arguments: {reason}')
        self.name = name
        self.count = count


@final
class Placeholder:
    """The type of `__`. There is only ever one instance."""

    _instance: Optional['Placeholder'] = None

    def __new__(cls) -> 'Placeholder':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '__'

    def __reduce__(self) -> Tuple[type, Tuple[()]]:
        return (Placeholder, ())

    def __copy__(self) -> 'Placeholder':
        return self

    def __deepcopy__(self, memo: dict) -> 'Placeholder':
        return self


placeholder = Placeholder()
__ = placeholder


def is_placeholder(value: object) -> TypeGuard[Placeholder]:
    return value is placeholder


def count_args(args: Sequence[object]) -> int:
    """Count the arguments that aren't placeholders."""
    return sum(1 for arg in args if not is_placeholder(arg))


def combine(
    received: Sequence[object], incoming: Sequence[object]
) -> Tuple[object, ...]:
    """Merge newly passed arguments into those already received.

    Each placeholder in `received` is replaced, left to right, by the next
    incoming argument. Placeholders are left in place once the incoming
    arguments run out, and incoming arguments left over are appended.
    """
    if not any(is_placeholder(value) for value in received):
        return (*received, *incoming)
    combined: List[object] = []
    index = 0
    for value in received:
        if index < len(incoming) and is_placeholder(value):
            combined.append(incoming[index])
            index += 1
        else:
            combined.append(value)
    combined.extend(incoming[index:])
    return tuple(combined)


class Curried:
    """A function waiting on `arity` real positional arguments.

    Instances never change. Each call that doesn't saturate the function
    returns a new Curried holding the combined arguments. Once saturated, the
    wrapped function receives every argument held, including any beyond
    `arity`.
    """

    def __init__(self, arity: int, func: Callable) -> None:
        if arity < 0:
            raise ValueError(f'arity must be non-negative, got {arity}')
        if not callable(func):
            raise TypeError(f'{func!r} is not callable')
        # update_wrapper copies the wrapped function's __dict__, so it has to
        # run before our own attributes are set
        functools.update_wrapper(self, func)
        self._name: str = getattr(func, '__name__', repr(func))
        self._arity = arity
        self._func = func
        self._received: Tuple[object, ...] = ()
        self._limit = clamda.arity.max_positional(func)

    @property
    def arity(self) -> int:
        return self._arity

    @property
    def func(self) -> Callable:
        return self._func

    @property
    def received(self) -> Tuple[object, ...]:
        return self._received

    @property
    def remaining(self) -> int:
        return max(self._arity - count_args(self._received), 0)

    @property
    def __signature__(self) -> inspect.Signature:
        """Required slots still open, then whatever else the target takes."""
        remaining = self.remaining
        parameters = [
            inspect.Parameter(f'arg{i}', inspect.Parameter.POSITIONAL_ONLY)
            for i in range(remaining)
        ]
        if self._limit is None:
            parameters.append(
                inspect.Parameter('args', inspect.Parameter.VAR_POSITIONAL)
            )
            return inspect.Signature(parameters)
        # incoming arguments fill open placeholders before lengthening the
        # buffer
        holes = len(self._received) - count_args(self._received)
        capacity = self._limit - len(self._received) + holes
        parameters.extend(
            inspect.Parameter(
                f'arg{i}', inspect.Parameter.POSITIONAL_ONLY, default=None
            )
            for i in range(remaining, max(capacity, remaining))
        )
        return inspect.Signature(parameters)

    def __call__(self, *args: object, **kwargs: object) -> Any:
        if kwargs:
            raise CurryError(
                f'{self._name} is curried and takes positional arguments only'
            )
        combined = combine(self._received, args)
        if count_args(combined) < self._arity:
            return self._with_received(combined)
        return self._invoke(combined)

    def _with_received(self, received: Tuple[object, ...]) -> 'Curried':
        partial = copy.copy(self)
        partial._received = received
        return partial

    def _invoke(self, args: Tuple[object, ...]) -> Any:
        if any(is_placeholder(arg) for arg in args):
            _logger.debug(
                '{} saturated with unfilled placeholders: {!r}',
                self._name,
                args,
            )
            raise ArityError(
                self._name, len(args), 'placeholders were never filled'
            )
        if self._limit is not None and len(args) > self._limit:
            _logger.debug(
                '{} accepts at most {} arguments, got {}',
                self._name,
                self._limit,
                len(args),
            )
            raise ArityError(
                self._name,
                len(args),
                f'it accepts at most {self._limit} positional arguments',
            )
        _logger.debug('invoking {} with {} arguments', self._name, len(args))
        return self._func(*args)

    def __repr__(self) -> str:
        received = ', '.join(map(repr, self._received))
        return f'<curried {self._name}/{self._arity} ({received})>'


def curry_n(arity: int, func: Callable) -> Curried:
    """Curry `func` up to `arity` arguments, afterwards invoking `func` with any
    other available arguments. One or more arguments may be passed on any call,
    and `func` is only invoked after `arity` real arguments are provided.

    With an arity of 0, every call invokes `func` right away.
    """
    return Curried(arity, func)


def curry(func: Callable) -> Curried:
    """Curry `func` by its count of required positional parameters.

    Variadic functions report an arity of 0, you probably want to use curry_n
    for those.
    """
    if isinstance(func, Curried):
        return func
    return Curried(clamda.arity.count_arity(func), func)


def defcurry(func: _F) -> Curried:
    """Decorator currying the decorated function by its parameter count."""
    if clamda.arity.is_variadic(func):
        raise TypeError(
            f'cannot curry {func.__name__}: it takes *args, use curry_n'
        )
    return curry(func)
