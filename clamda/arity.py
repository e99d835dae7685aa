"""Arity detection for plain Python callables."""

import inspect
from typing import Callable, Optional


_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _signature(f: Callable) -> Optional[inspect.Signature]:
    try:
        return inspect.signature(f)
    # builtins implemented in C do not always carry a signature
    except (TypeError, ValueError):
        return None


def count_arity(f: Callable) -> int:
    """Count the required positional parameters of `f`.

    Variadic functions (those declaring *args) and functions whose signature
    cannot be read report an arity of 0; use curry_n with an explicit arity
    for those.

        count_arity(lambda x, y, z: x + y + z)   # 3
        count_arity(lambda x, y=1: x + y)        # 1
        count_arity(lambda x, *more: x)          # 0
    """
    signature = _signature(f)
    if signature is None:
        return 0
    parameters = signature.parameters.values()
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in parameters):
        return 0
    return sum(
        1
        for p in parameters
        if p.kind in _POSITIONAL and p.default is inspect.Parameter.empty
    )


def max_positional(f: Callable) -> Optional[int]:
    """The most positional arguments `f` accepts, or None if unbounded or
    unknown."""
    signature = _signature(f)
    if signature is None:
        return None
    count = 0
    for p in signature.parameters.values():
        if p.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if p.kind in _POSITIONAL:
            count += 1
    return count


def is_variadic(f: Callable) -> bool:
    signature = _signature(f)
    if signature is None:
        return False
    return any(
        p.kind is inspect.Parameter.VAR_POSITIONAL
        for p in signature.parameters.values()
    )
