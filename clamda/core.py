"""Curried, data-last helpers.

Nearly every helper is curried and expects its data last, so that partially
applied helpers compose into unary functions:

    names = pluck('name')
    is_adult = prop_satisfies(lambda age: age >= 18, 'age')
    flag_adults = when(is_adult, assoc('adult', True))

Absent values are represented by None, as with dict.get. The `*_or` variants
only fall back to their default when a key or path is actually missing, so a
stored None, False or empty value is returned as is.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Dict, Hashable, Iterable, Tuple

import clamda.arity
import clamda.logging
from clamda.curry import __, curry, curry_n, defcurry, placeholder

_logger = clamda.logging.get_logger(__name__)

__all__ = [
    '__',
    'F',
    'T',
    'add',
    'all_pass',
    'always',
    'any_pass',
    'apply_spec',
    'assoc',
    'assoc_in',
    'assoc_many',
    'both',
    'complement',
    'curry',
    'curry_n',
    'dec',
    'default_to',
    'defcurry',
    'dissoc',
    'divide',
    'either',
    'equals',
    'evolve',
    'from_pairs',
    'identity',
    'if_else',
    'inc',
    'modulo',
    'multiply',
    'negate',
    'none_pass',
    'omit',
    'path',
    'path_eq',
    'path_or',
    'path_satisfies',
    'paths',
    'pick',
    'placeholder',
    'pluck',
    'project',
    'prop',
    'prop_eq',
    'prop_or',
    'prop_satisfies',
    'props',
    'subtract',
    'tap',
    'to_pairs',
    'try_catch',
    'unless',
    'update',
    'update_in',
    'when',
]


class _Missing:
    def __repr__(self) -> str:
        return '<missing>'


_missing = _Missing()


def _is_sequence(data: object) -> bool:
    # strings and bytes are values, not containers
    return isinstance(data, Sequence) and not isinstance(
        data, (str, bytes, bytearray)
    )


def _has_index(data: object, key: object) -> bool:
    return (
        _is_sequence(data)
        and isinstance(key, int)
        and not isinstance(key, bool)
        and -len(data) <= key < len(data)  # type: ignore
    )


def _get(data: object, key: object, default: object) -> object:
    if isinstance(data, Mapping):
        return data.get(key, default)
    if _has_index(data, key):
        return data[key]  # type: ignore
    return default


def _items(data: object) -> Iterable[Tuple[object, object]]:
    if isinstance(data, Mapping):
        return data.items()
    if _is_sequence(data):
        return enumerate(data)  # type: ignore
    return ()


def _put(data: object, key: object, value: object) -> object:
    """A copy of `data` with `value` at `key`. None is treated as an empty
    dict, and sequences keep their type when `key` is one of their indices.
    """
    if data is None:
        return {key: value}
    if _has_index(data, key):
        items = list(data)  # type: ignore
        items[key] = value  # type: ignore
        return tuple(items) if isinstance(data, tuple) else items
    return {**data, key: value}  # type: ignore


def _get_in(data: object, keys: Iterable[object], default: object) -> object:
    for key in keys:
        data = _get(data, key, _missing)
        if data is _missing:
            return default
    return data


# arithmetic


@defcurry
def add(a, b):
    return a + b


@defcurry
def subtract(a, b):
    """`a - b`. Use `subtract(__, b)` to subtract from the data."""
    return a - b


@defcurry
def multiply(a, b):
    return a * b


@defcurry
def divide(a, b):
    """`a / b`. Use `divide(__, b)` to divide the data."""
    return a / b


@defcurry
def modulo(a, b):
    return a % b


@defcurry
def inc(x):
    return x + 1


@defcurry
def dec(x):
    return x - 1


@defcurry
def negate(x):
    return -x


@defcurry
def equals(a, b):
    return a == b


# constants


@defcurry
def identity(x):
    return x


@defcurry
def always(value):
    """A function returning `value` whatever it's called with."""

    def constant(*args: object) -> object:
        return value

    return curry_n(0, constant)


T = always(True)
"""True constant."""

F = always(False)
"""False constant."""


@defcurry
def default_to(default, data):
    """Returns the given data if it isn't None, otherwise returns the default."""
    if data is not None:
        return data
    return default


# fields and paths


@defcurry
def prop(key, data):
    """The value at `key` in `data`, or None. See `prop_or`."""
    return _get(data, key, None)


@defcurry
def prop_or(default, key, data):
    """The value at `key` in `data`, or `default` if `data` has no such key."""
    return _get(data, key, default)


@defcurry
def prop_eq(key, x, data):
    return prop(key, data) == x


@defcurry
def prop_satisfies(pred, key, data):
    """Retrieves the value using `prop` and runs it against the predicate."""
    return pred(prop(key, data))


@defcurry
def props(keys, data):
    return [prop(key, data) for key in keys]


@defcurry
def pluck(key, maps):
    """Get the named prop value from each given map. See `prop`."""
    return [prop(key, data) for data in maps]


@defcurry
def path(keys, data):
    """The value found by following `keys` through nested containers, or None
    as soon as a key is missing or a value along the way isn't a container.
    """
    return _get_in(data, keys, None)


@defcurry
def path_or(default, keys, data):
    return _get_in(data, keys, default)


@defcurry
def path_eq(keys, x, data):
    return path(keys, data) == x


@defcurry
def path_satisfies(pred, keys, data):
    """Retrieves the value using `path` and runs it against the predicate."""
    return pred(path(keys, data))


@defcurry
def paths(keys_list, data):
    """Fetches values from multiple paths through the given map. See `path`."""
    return [path(keys, data) for keys in keys_list]


@defcurry
def pick(keys, data):
    """A new dict of the `keys` present in `data`."""
    picked = {}
    for key in keys:
        value = _get(data, key, _missing)
        if value is not _missing:
            picked[key] = value
    return picked


@defcurry
def omit(keys, data):
    excluded = set(keys)
    return {key: value for key, value in _items(data) if key not in excluded}


@defcurry
def project(keys, maps):
    """`pick`s `keys` from each map in `maps`. Analogous to a SQL select."""
    return [pick(keys, data) for data in maps]


# updates


@defcurry
def assoc(key, value, data):
    return _put(data, key, value)


@defcurry
def assoc_many(kvs, data):
    """`assoc` every key and value of a flat `[k1, v1, k2, v2, ...]` sequence."""
    kvs = list(kvs)
    if len(kvs) % 2:
        raise ValueError(
            f'assoc_many expects an even number of keys and values, '
            f'got {len(kvs)}'
        )
    for key, value in zip(kvs[::2], kvs[1::2]):
        data = _put(data, key, value)
    return data


@defcurry
def assoc_in(keys, value, data):
    """Sets the value at the path, creating dicts for missing levels.
    Sequences along the path are copied with the indexed slot replaced."""
    keys = list(keys)
    if not keys:
        return value
    head, rest = keys[0], keys[1:]
    if rest:
        inner = _get(data, head, None)
        value = assoc_in(rest, value, inner)
    return _put(data, head, value)


@defcurry
def dissoc(key, data):
    return {k: v for k, v in _items(data) if k != key}


@defcurry
def update(key, fn, data):
    """Replaces the value at `key` with `fn` applied to it. `fn` receives None
    when the key is missing."""
    return assoc(key, fn(prop(key, data)), data)


@defcurry
def update_in(keys, fn, data):
    return assoc_in(keys, fn(path(keys, data)), data)


@defcurry
def to_pairs(data):
    """Get `(key, value)` pairs from a map."""
    return list(data.items())


@defcurry
def from_pairs(pairs):
    """Turn `(key, value)` pairs into a map."""
    return dict(pairs)


# predicates


@defcurry
def both(left, right, data):
    """True when neither unary function returns None for `data`."""
    return left(data) is not None and right(data) is not None


@defcurry
def either(left, right, data):
    """True when either unary function returns something other than None for
    `data`."""
    return left(data) is not None or right(data) is not None


@defcurry
def all_pass(preds, data):
    return all(pred(data) for pred in preds)


@defcurry
def any_pass(preds, data):
    return any(pred(data) for pred in preds)


@defcurry
def none_pass(preds, data):
    return not any(pred(data) for pred in preds)


@defcurry
def complement(pred, data):
    return not pred(data)


# control flow


@defcurry
def if_else(test, then, else_, data):
    """`test`, `then` and `else_` are all unary functions receiving `data`."""
    if test(data):
        return then(data)
    return else_(data)


@defcurry
def when(test, then, data):
    """`then(data)` when `test(data)` holds, otherwise `data` unchanged."""
    return if_else(test, then, identity, data)


@defcurry
def unless(test, else_, data):
    return if_else(test, identity, else_, data)


@defcurry
def tap(tapper, data):
    """Invokes `tapper` with data (presumably for side-effects) and returns
    data, discarding whatever `tapper` returned."""
    tapper(data)
    return data


@defcurry
def try_catch(tryer, catcher, data):
    """Returns `tryer(data)`, unless it raises, in which case the result of
    `catcher(exception, data)` is returned instead."""
    try:
        return tryer(data)
    except Exception as exception:
        _logger.debug(
            'try_catch captured {}', type(exception).__name__, exc_info=True
        )
        return catcher(exception, data)


# map transformers


def _spec_arity(spec: Mapping) -> int:
    arity = 0
    for value in spec.values():
        if isinstance(value, Mapping):
            arity = max(arity, _spec_arity(value))
        else:
            arity = max(arity, clamda.arity.count_arity(value))
    return arity


def _build(spec: Mapping, args: Tuple[object, ...]) -> Dict[Hashable, Any]:
    return {
        key: (
            _build(value, args) if isinstance(value, Mapping) else value(*args)
        )
        for key, value in spec.items()
    }


def apply_spec(spec: Mapping, *args: object) -> Any:
    """Build a dict of the same shape as `spec` by calling each function in it
    with the same arguments.

        apply_spec({'sum': add, 'nested': {'mul': multiply}})(2, 4)
        # {'sum': 6, 'nested': {'mul': 8}}

    The returned function is curried to the largest arity found in `spec`.
    Arguments passed along with `spec` are applied straight away.
    """

    def build(*args: object) -> Dict[Hashable, Any]:
        return _build(spec, args)

    applied = curry_n(_spec_arity(spec), build)
    if args:
        return applied(*args)
    return applied


apply_spec = curry_n(1, apply_spec)


@defcurry
def evolve(spec, data):
    """A copy of `data` where each key also found in `spec` is transformed by
    the function `spec` holds for it. Nested specs evolve nested maps. Keys
    missing from either side are left alone.
    """
    if not isinstance(data, Mapping):
        return data
    evolved = dict(data)
    for key, transformation in spec.items():
        if key not in data:
            continue
        if callable(transformation):
            evolved[key] = transformation(data[key])
        elif isinstance(transformation, Mapping):
            evolved[key] = evolve(transformation, data[key])
    return evolved

