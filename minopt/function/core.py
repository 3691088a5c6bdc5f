"""Type-erased wrappers around user computations.

A :class:`Function` hides how a computation is performed behind an
:class:`EvaluationStrategy` and exposes a single evaluation entry point to the
solvers. A :class:`DifferentiableFunction` adds derivative evaluation on top of
the same strategy object.

Copies of a wrapper (``copy.copy``, :meth:`Function.copy`, or
:meth:`DifferentiableFunction.as_function`) share the strategy and the
evaluation counters with the original. Counters are incremented without any
locking, so evaluating aliases of one wrapper from several threads at once is
not supported.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Tuple

import numpy as np

from minopt.exceptions import PreconditionViolationError
from minopt.function.finite_difference import approx_derivative

ValueFn = Callable[..., Any]
OutputParamFn = Callable[..., None]
ProbeFn = Callable[..., Tuple[Any, Any]]
Allocator = Callable[[Any], Any]


class EvaluationCounter:
    """Mutable evaluation count shared by reference between wrapper aliases."""

    __slots__ = ("count",)

    def __init__(self) -> None:
        self.count = 0

    def increment(self) -> None:
        self.count += 1

    def __repr__(self) -> str:
        return f"EvaluationCounter(count={self.count})"


class EvaluationStrategy(ABC):
    """How a wrapped computation produces its value."""

    @abstractmethod
    def value(self, x: Any, out: Any = None) -> Any:
        """Evaluate the computation at ``x``.

        If ``out`` is given the result is written into it and ``out`` is
        returned.
        """


class DifferentiableStrategy(EvaluationStrategy):
    """Strategy that can also produce the derivative of the computation."""

    @abstractmethod
    def derivative(self, x: Any) -> Any:
        """Evaluate the derivative (or gradient) at ``x``."""

    @abstractmethod
    def value_and_derivative(self, x: Any) -> Tuple[Any, Any]:
        """Evaluate value and derivative at ``x`` in one pass."""


def _float_like(x: Any) -> np.ndarray:
    return np.empty_like(x, dtype=np.result_type(x, float))


def _store(out: Any, y: Any) -> Any:
    if out is None:
        return y
    out[...] = y
    return out


class _ValueStrategy(EvaluationStrategy):
    """Callable ``fn(x, *args) -> y``."""

    def __init__(self, fn: ValueFn, args: tuple) -> None:
        self._fn = fn
        self._args = args

    def value(self, x: Any, out: Any = None) -> Any:
        return _store(out, self._fn(x, *self._args))


class _OutputParamStrategy(EvaluationStrategy):
    """Callable ``fn(x, out, *args)`` that writes its result into ``out``."""

    def __init__(self, fn: OutputParamFn, args: tuple, allocate: Allocator) -> None:
        self._fn = fn
        self._args = args
        self._allocate = allocate

    def value(self, x: Any, out: Any = None) -> Any:
        if out is None:
            out = self._allocate(x)
        self._fn(x, out, *self._args)
        return out


class _ProbeStrategy(DifferentiableStrategy):
    """Combined probe ``fn(x, compute_value, compute_derivative, *args)``.

    The probe returns a ``(value, derivative)`` pair and may leave an entry as
    ``None`` when the matching flag is ``False``. At least one flag is always
    ``True``.
    """

    def __init__(self, fn: ProbeFn, args: tuple) -> None:
        self._fn = fn
        self._args = args

    def value(self, x: Any, out: Any = None) -> Any:
        y, _ = self._fn(x, True, False, *self._args)
        return _store(out, y)

    def derivative(self, x: Any) -> Any:
        _, dy = self._fn(x, False, True, *self._args)
        return dy

    def value_and_derivative(self, x: Any) -> Tuple[Any, Any]:
        return self._fn(x, True, True, *self._args)


class _SplitStrategy(DifferentiableStrategy):
    """Separate ``fun(x)`` and optional ``grad(x)`` callables."""

    def __init__(self, fun: ValueFn, grad: Optional[ValueFn]) -> None:
        self._fun = fun
        self._grad = grad

    def value(self, x: Any, out: Any = None) -> Any:
        return _store(out, self._fun(x))

    def derivative(self, x: Any) -> Any:
        if self._grad is None:
            raise PreconditionViolationError(
                "No derivative was supplied for this function."
            )
        return self._grad(x)

    def value_and_derivative(self, x: Any) -> Tuple[Any, Any]:
        return self.value(x), self.derivative(x)


def _read(counter: Optional[EvaluationCounter], what: str) -> int:
    if counter is None:
        raise PreconditionViolationError(
            f"{what} counter read before start_counting() was called."
        )
    return counter.count


class Function:
    """Shareable wrapper around a computation ``domain -> codomain``.

    Build instances with :meth:`from_value_function` or
    :meth:`from_output_param_function`, or obtain one from
    :meth:`DifferentiableFunction.as_function`.

    Example
    -------
    >>> f = Function.from_value_function(lambda x, c: x * x - c, 2.0)
    >>> f.start_counting()
    >>> f(3.0)
    7.0
    >>> f.value_count
    1
    """

    def __init__(
        self,
        strategy: EvaluationStrategy,
        counter: Optional[EvaluationCounter] = None,
    ) -> None:
        self._strategy = strategy
        self._counter = counter

    @classmethod
    def from_value_function(cls, fn: ValueFn, *args: Any) -> "Function":
        """Wrap ``fn(x, *args) -> y``; extra ``args`` are bound now."""
        return cls(_ValueStrategy(fn, args))

    @classmethod
    def from_output_param_function(
        cls,
        fn: OutputParamFn,
        *args: Any,
        allocate: Optional[Allocator] = None,
    ) -> "Function":
        """Wrap ``fn(x, out, *args)``, which writes its result into ``out``.

        The codomain object is never copied: callers may pass their own
        ``out`` buffer to :meth:`evaluate`. When they do not, ``allocate(x)``
        creates one. The default allocates a floating-point array shaped like
        ``x``, so callables whose codomain has another shape (a scalar
        objective on a vector domain, for instance) must supply ``allocate``.
        """
        return cls(_OutputParamStrategy(fn, args, allocate or _float_like))

    @property
    def strategy(self) -> EvaluationStrategy:
        return self._strategy

    def evaluate(self, x: Any, out: Any = None) -> Any:
        """Evaluate at ``x``, optionally writing into ``out``."""
        y = self._strategy.value(x, out)
        if self._counter is not None:
            self._counter.increment()
        return y

    __call__ = evaluate

    def start_counting(self) -> None:
        """Attach a fresh counter starting at zero.

        Aliases created before this call keep the previous counter.
        """
        self._counter = EvaluationCounter()

    @property
    def value_count(self) -> int:
        """Number of evaluations since :meth:`start_counting`."""
        return _read(self._counter, "Value")

    def copy(self) -> "Function":
        """Return an alias sharing strategy and counter."""
        return copy.copy(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strategy={type(self._strategy).__name__}, counter={self._counter!r})"


class DifferentiableFunction:
    """Shareable wrapper around a computation and its derivative.

    All three entry points are served by one strategy. :meth:`value` and
    :meth:`value_and_derivative` advance the value counter,
    :meth:`derivative` and :meth:`value_and_derivative` advance the
    derivative counter. Counters advance only when the evaluation returns.
    """

    def __init__(
        self,
        strategy: DifferentiableStrategy,
        value_counter: Optional[EvaluationCounter] = None,
        derivative_counter: Optional[EvaluationCounter] = None,
    ) -> None:
        self._strategy = strategy
        self._value_counter = value_counter
        self._derivative_counter = derivative_counter

    @classmethod
    def from_combined_probe_function(
        cls, probe: ProbeFn, *args: Any
    ) -> "DifferentiableFunction":
        """Wrap ``probe(x, compute_value, compute_derivative, *args)``.

        The probe returns ``(value, derivative)`` and should skip the work
        for any output whose flag is ``False``.

        Example
        -------
        >>> def square_root(x, compute_value, compute_derivative, c):
        ...     f = x * x - c if compute_value else None
        ...     df = 2 * x if compute_derivative else None
        ...     return f, df
        >>> f = DifferentiableFunction.from_combined_probe_function(square_root, 2.0)
        >>> f.value_and_derivative(3.0)
        (7.0, 6.0)
        """
        return cls(_ProbeStrategy(probe, args))

    @classmethod
    def from_callables(
        cls, fun: ValueFn, grad: Optional[ValueFn] = None
    ) -> "DifferentiableFunction":
        """Wrap separate value and derivative callables.

        Without ``grad`` only :meth:`value` is usable; asking for the
        derivative raises :class:`PreconditionViolationError`.
        """
        return cls(_SplitStrategy(fun, grad))

    @classmethod
    def from_finite_differences(
        cls, fun: ValueFn, eps: float = 1e-6
    ) -> "DifferentiableFunction":
        """Wrap ``fun`` with a central-difference derivative."""
        def grad(x: Any) -> Any:
            return approx_derivative(fun, x, eps=eps)

        return cls(_SplitStrategy(fun, grad))

    @property
    def strategy(self) -> DifferentiableStrategy:
        return self._strategy

    def value(self, x: Any) -> Any:
        y = self._strategy.value(x)
        if self._value_counter is not None:
            self._value_counter.increment()
        return y

    __call__ = value

    def derivative(self, x: Any) -> Any:
        dy = self._strategy.derivative(x)
        if self._derivative_counter is not None:
            self._derivative_counter.increment()
        return dy

    def value_and_derivative(self, x: Any) -> Tuple[Any, Any]:
        y, dy = self._strategy.value_and_derivative(x)
        if self._value_counter is not None:
            self._value_counter.increment()
        if self._derivative_counter is not None:
            self._derivative_counter.increment()
        return y, dy

    def start_counting(self) -> None:
        """Attach fresh value and derivative counters starting at zero."""
        self._value_counter = EvaluationCounter()
        self._derivative_counter = EvaluationCounter()

    @property
    def value_count(self) -> int:
        return _read(self._value_counter, "Value")

    @property
    def derivative_count(self) -> int:
        return _read(self._derivative_counter, "Derivative")

    def as_function(self) -> Function:
        """Drop the derivative capability.

        The returned :class:`Function` shares this object's strategy and value
        counter, so its evaluations keep accumulating into :attr:`value_count`.
        """
        return Function(self._strategy, self._value_counter)

    def copy(self) -> "DifferentiableFunction":
        """Return an alias sharing strategy and both counters."""
        return copy.copy(self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(strategy={type(self._strategy).__name__}, "
            f"value_counter={self._value_counter!r}, "
            f"derivative_counter={self._derivative_counter!r})"
        )


__all__ = [
    "DifferentiableFunction",
    "DifferentiableStrategy",
    "EvaluationCounter",
    "EvaluationStrategy",
    "Function",
]
