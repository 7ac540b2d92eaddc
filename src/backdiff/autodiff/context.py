from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, Final

import numpy as np

from backdiff.autodiff.field import AutoDiffField
from backdiff.autodiff.tape import Tape
from backdiff.autodiff.variable import Variable, _ManagedVariable

_ZERO: Final = np.float64(0.0)


class AutoDiffContext(AutoDiffField):
    """Create a new differentiation context.

    A context owns a :class:`Tape` and the derivatives of the variables it did not
    create. Derivatives of variables created by :meth:`variable` are stored in the
    variables themselves.

    Warnings
    --------
    A context is used for exactly one backward pass. Contexts and the variables
    involved in them must not be shared between threads while they are in use.

    Examples
    --------
    >>> x = Variable(2.0)
    >>> ctx = AutoDiffContext()
    >>> y = ctx.mul(x, x)
    >>> ctx.setderiv(y, 1.0)
    >>> ctx.run_backward()
    1
    >>> print(ctx.getderiv(x))
    4.0
    """

    __slots__ = ("_tape", "_derivatives", "_finished")
    _tape: Tape
    _derivatives: dict[Variable, np.float64]
    _finished: bool

    def __init__(self):
        self._tape = Tape()
        self._derivatives = {}
        self._finished = False

    @property
    def tape(self) -> Tape:
        return self._tape

    @property
    def derivatives(self) -> Mapping[Variable, np.float64]:
        """Derivatives with respect to the variables not created by the context."""
        return MappingProxyType(self._derivatives)

    @property
    def finished(self) -> bool:
        """Whether the backward pass has already run."""
        return self._finished

    def variable(self, value: Any) -> Variable:
        return _ManagedVariable(value)

    def getderiv(self, variable: Variable) -> np.float64:
        if isinstance(variable, _ManagedVariable):
            return variable.d

        return self._derivatives.get(variable, _ZERO)

    def setderiv(self, variable: Variable, value: Any) -> None:
        if isinstance(variable, _ManagedVariable):
            variable.d = np.float64(value)
        elif isinstance(variable, Variable):
            self._derivatives[variable] = np.float64(value)
        else:
            raise TypeError(f"expected a variable, got {type(variable).__name__!r}")

    def record[R](self, value: R, update: Callable[[R], None]) -> R:
        if self._finished:
            raise RuntimeError("cannot record after the backward pass")

        return self._tape.record(value, update)

    def run_backward(self) -> int:
        """Replay the tape in reverse order.

        Returns
        -------
        int
            Number of replayed operations.

        Raises
        ------
        RuntimeError
            If the backward pass has already run.
        """
        if self._finished:
            raise RuntimeError("backward pass has already run")

        self._finished = True
        return self._tape.run_backward()
