"""Result and progress-record types shared across the solvers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from minopt.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class IterationRecord:
    """Progress of one solver iteration.

    Root finders fill ``fun`` with the residual before the step and
    ``residual`` with ``|delta|``; Adam fills them with the objective value and
    the gradient norm.
    """

    iteration: int
    x: Any
    fun: float
    residual: float


Callback = Callable[[IterationRecord], None]


@dataclass
class OptimizeResult:
    """Standard result object returned by all solvers in this module.

    ``nfev`` and ``njev`` count the value and derivative evaluations made by
    this call only, independently of the function's own counters.
    """

    x: Any
    fun: Optional[float]
    nit: int
    success: bool
    message: str
    nfev: int
    njev: int
    grad_norm: Optional[float] = None
    history: List[IterationRecord] = field(default_factory=list)


def report_iteration(
    record: IterationRecord,
    callback: Optional[Callback],
    history: List[IterationRecord],
    level: int = logging.DEBUG,
) -> None:
    """Send ``record`` to the logger, the history and ``callback``."""
    logger.log(
        level,
        "%5d x = %s f = %.17g residual = %.10g",
        record.iteration,
        record.x,
        record.fun,
        record.residual,
    )
    history.append(record)
    if callback is not None:
        callback(record)


__all__ = ["Callback", "IterationRecord", "OptimizeResult", "report_iteration"]
