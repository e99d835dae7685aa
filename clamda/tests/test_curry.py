from clamda.curry import (
    ArityError,
    Curried,
    CurryError,
    Placeholder,
    __,
    combine,
    count_args,
    curry,
    curry_n,
    defcurry,
    is_placeholder,
    placeholder,
)
from clamda.arity import count_arity, max_positional
import copy
from hypothesis import given
import hypothesis.strategies as st
import inspect
import pickle
from typing import List, Tuple
import unittest


def mul(x, y):
    return x * y


def add(x, y):
    return x + y


def mul3(x, y, z):
    return x * y * z


def add_variadic(x, y, z, *more):
    return x + y + z + sum(more)


def record(*args):
    return args


def groupings(
    values: List[int],
) -> st.SearchStrategy[List[List[int]]]:
    """Split `values` into consecutive, possibly empty, groups."""
    return st.lists(
        st.integers(min_value=0, max_value=len(values)), max_size=6
    ).map(
        lambda cuts: [
            values[start:end]
            for start, end in zip(
                [0, *sorted(cuts)], [*sorted(cuts), len(values)]
            )
        ]
    )


@st.composite
def arguments_and_groups(
    draw: st.DrawFn,
) -> Tuple[List[int], List[List[int]]]:
    values = draw(st.lists(st.integers(), min_size=1, max_size=8))
    return values, draw(groupings(values))


class TestPlaceholder(unittest.TestCase):
    def test_singleton(self) -> None:
        self.assertIs(placeholder, __)
        self.assertIs(Placeholder(), __)
        self.assertIs(copy.copy(__), __)
        self.assertIs(copy.deepcopy([__])[0], __)
        self.assertIs(pickle.loads(pickle.dumps(__)), __)

    def test_repr(self) -> None:
        self.assertEqual('__', repr(__))

    def test_is_placeholder(self) -> None:
        self.assertTrue(is_placeholder(__))
        for value in [None, False, 0, '', '__', [], object()]:
            with self.subTest(value=value):
                self.assertFalse(is_placeholder(value))

    def test_count_args(self) -> None:
        self.assertEqual(0, count_args([]))
        self.assertEqual(0, count_args([__, __]))
        self.assertEqual(2, count_args([1, __, None]))


class TestCombine(unittest.TestCase):
    def test_fills_placeholders_in_order(self) -> None:
        self.assertEqual(
            (1, 5, 2, 3, __, 4), combine((1, __, 2, 3, __, 4), (5,))
        )
        self.assertEqual(
            (1, 5, 2, 3, 6, 4, 7), combine((1, __, 2, 3, __, 4), (5, 6, 7))
        )

    def test_keeps_unfilled_placeholders(self) -> None:
        self.assertEqual((__, __, 1), combine((__, __, 1), ()))

    def test_incoming_placeholder_keeps_slot_open(self) -> None:
        self.assertEqual((__, 1, 2), combine((__, 1), (__, 2)))

    @given(st.lists(st.integers()), st.lists(st.integers()))
    def test_concatenates_without_placeholders(
        self, received: List[int], incoming: List[int]
    ) -> None:
        self.assertEqual(
            (*received, *incoming), combine(received, incoming)
        )

    @given(
        st.lists(st.one_of(st.integers(), st.just(__))),
        st.lists(st.integers()),
    )
    def test_never_shrinks(
        self, received: List[object], incoming: List[int]
    ) -> None:
        combined = combine(received, incoming)
        self.assertGreaterEqual(len(combined), len(received))
        self.assertEqual(
            count_args(received) + len(incoming), count_args(combined)
        )

    def test_does_not_mutate_received(self) -> None:
        received = [__, 1]
        combine(received, (2,))
        self.assertEqual([__, 1], received)


class TestCurryN(unittest.TestCase):
    def test_variadic_target(self) -> None:
        add_variadic_curried = curry_n(3, add_variadic)
        self.assertEqual(6, add_variadic_curried(1, 2, 3))
        self.assertEqual(6, add_variadic_curried(1)(2, 3))
        self.assertEqual(6, add_variadic_curried(1, 2)(3))
        self.assertEqual(6, add_variadic_curried(1)(2)(3))
        self.assertEqual(55, add_variadic_curried(1)(2)(3, 4, 5, 6, 7, 8, 9, 10))
        self.assertIsInstance(add_variadic_curried(1), Curried)
        self.assertIsInstance(add_variadic_curried(1, 2), Curried)
        self.assertIsInstance(add_variadic_curried(1)(2), Curried)

    def test_over_saturation_passes_everything_through(self) -> None:
        self.assertEqual(
            tuple(range(10)), curry_n(3, record)(*range(10))
        )

    def test_placeholder_ordering(self) -> None:
        g = curry_n(6, record)
        step = g(1, __, 2, 3, __, 4)
        self.assertIsInstance(step, Curried)
        step = step(5)
        self.assertIsInstance(step, Curried)
        self.assertEqual((1, 5, 2, 3, 6, 4), step(6))

    def test_placeholder_filled_by_any_later_call(self) -> None:
        subtract = curry_n(2, lambda a, b: a - b)
        self.assertEqual(7, subtract(__, 3)(10))
        self.assertEqual(7, subtract(__)(__, 3)(10))
        self.assertEqual(-7, subtract(3)(10))

    def test_empty_call_returns_equivalent_function(self) -> None:
        curried = curry_n(2, add)
        self.assertIsInstance(curried(), Curried)
        self.assertEqual(3, curried()(1)()(2))

    def test_zero_arity_invokes_immediately(self) -> None:
        calls = []

        def thunk(*args):
            calls.append(args)
            return len(calls)

        curried = curry_n(0, thunk)
        self.assertEqual([], calls)
        self.assertEqual(1, curried())
        self.assertEqual(2, curried(1, 2))
        self.assertEqual([(), (1, 2)], calls)

    def test_partial_application_does_not_change_original(self) -> None:
        curried = curry_n(3, record)
        one = curried(1)
        two = curried(2)
        self.assertEqual((), curried.received)
        self.assertEqual((1,), one.received)
        self.assertEqual((1, 'a', 'b'), one('a', 'b'))
        self.assertEqual((2, 'c', 'd'), two('c', 'd'))
        self.assertEqual((1, 'x', 'y'), one('x', 'y'))

    def test_remaining_and_signature(self) -> None:
        curried = curry_n(3, record)
        self.assertEqual(3, curried.remaining)
        self.assertEqual(2, curried(__, 1).remaining)
        self.assertEqual(1, count_arity(curried(1, 2)))
        parameters = list(inspect.signature(curried(1, 2)).parameters.values())
        self.assertIs(inspect.Parameter.VAR_POSITIONAL, parameters[-1].kind)

    def test_signature_reports_optional_capacity(self) -> None:
        def with_default(a, b=1):
            return (a, b)

        curried = curry(with_default)
        self.assertEqual(1, count_arity(curried))
        self.assertEqual(2, max_positional(curried))
        self.assertEqual(2, max_positional(curry_n(3, mul3)(__, 1)))
        self.assertEqual(1, max_positional(curry(add)(10)))
        self.assertIsNone(max_positional(curry_n(2, record)))

    def test_negative_arity(self) -> None:
        with self.assertRaises(ValueError):
            curry_n(-1, add)

    def test_not_callable(self) -> None:
        with self.assertRaises(TypeError):
            curry_n(1, 5)  # type: ignore

    def test_keywords_rejected(self) -> None:
        with self.assertRaises(CurryError):
            curry_n(2, add)(1, y=2)

    def test_unfilled_placeholder_on_saturation(self) -> None:
        with self.assertRaises(ArityError) as cm:
            curry_n(2, record)(__, 1, 2)
        self.assertEqual(3, cm.exception.count)
        self.assertIn('record', str(cm.exception))

    def test_too_many_arguments_for_fixed_target(self) -> None:
        with self.assertRaises(ArityError) as cm:
            curry_n(2, add)(1, 2, 3)
        self.assertEqual(3, cm.exception.count)
        self.assertIn('3 arguments', str(cm.exception))
        self.assertIsInstance(cm.exception, TypeError)

    def test_wraps_name_and_doc(self) -> None:
        def documented(x):
            """Documented."""
            return x

        curried = curry_n(1, documented)
        self.assertEqual('documented', curried.__name__)
        self.assertEqual('Documented.', curried.__doc__)
        self.assertIn('documented/1', repr(curried))

    @given(arguments_and_groups())
    def test_any_grouping_equals_direct_call(
        self, arguments_and_groups: Tuple[List[int], List[List[int]]]
    ) -> None:
        values, groups = arguments_and_groups
        result: object = curry_n(len(values), record)
        for group in groups:
            if not isinstance(result, Curried):
                # saturated by an earlier group
                self.assertEqual([], group)
                continue
            result = result(*group)
        self.assertEqual(tuple(values), result)

    @given(st.lists(st.integers(), min_size=1, max_size=8), st.data())
    def test_placeholders_filled_by_later_calls(
        self, values: List[int], data: st.DataObject
    ) -> None:
        deferred = data.draw(
            st.lists(
                st.integers(min_value=0, max_value=len(values) - 1),
                unique=True,
            )
        )
        first = [__ if i in deferred else v for i, v in enumerate(values)]
        curried = curry_n(len(values), record)
        result = curried(*first)
        later = [values[i] for i in sorted(deferred)]
        if later:
            self.assertIsInstance(result, Curried)
            result = result(*later)
        self.assertEqual(tuple(values), result)


class TestCurry(unittest.TestCase):
    def test_detects_arity(self) -> None:
        def adder(x, y, z):
            return x + y + z

        curried_adder = curry(adder)
        self.assertIsInstance(curried_adder(1), Curried)
        self.assertIsInstance(curried_adder(1, 2), Curried)
        self.assertEqual(6, curried_adder(1, 2, 3))
        self.assertEqual(6, curried_adder(1, 2)(3))
        self.assertEqual(6, curried_adder(1)(2, 3))
        self.assertEqual(6, curried_adder(1)(2)(3))

    def test_variadic_is_not_curried(self) -> None:
        curried = curry(add_variadic)
        self.assertEqual(0, curried.arity)
        with self.assertRaises(TypeError):
            curried(1)

    def test_curried_is_returned_as_is(self) -> None:
        curried = curry(mul)
        self.assertIs(curried, curry(curried))

    def test_defcurry(self) -> None:
        @defcurry
        def both_ways(a, b):
            return (a, b)

        self.assertEqual(2, both_ways.arity)
        self.assertEqual(('a', 'b'), both_ways('a')('b'))
        self.assertEqual(('b', 'a'), both_ways(__, 'a')('b'))

    def test_defcurry_refuses_variadic(self) -> None:
        with self.assertRaises(TypeError):
            defcurry(add_variadic)

    def test_nested_curried_target(self) -> None:
        inner = curry(add)
        outer = curry_n(1, inner(10))
        self.assertEqual(11, outer(1))

    def test_nested_variadic_target_passes_extra_arguments(self) -> None:
        outer = curry_n(1, curry_n(2, record)(1))
        self.assertEqual((1, 2, 3), outer(2, 3))

    def test_nested_target_with_optional_parameter(self) -> None:
        def with_default(a, b=1):
            return (a, b)

        outer = curry_n(1, curry(with_default))
        self.assertEqual((1, 2), outer(1, 2))
        self.assertEqual((1, 1), outer(1))
        with self.assertRaises(ArityError):
            outer(1, 2, 3)
