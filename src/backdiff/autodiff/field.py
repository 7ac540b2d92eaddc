from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import numpy as np

from backdiff.autodiff.variable import Variable
from backdiff.typing import Operand


class AutoDiffField(ABC):
    """Abstract base class for differentiation contexts.

    Every differentiable operation is written against this class: it computes the
    forward value, then calls :meth:`record` with a backward update that pushes the
    derivative of the result onto the operands by the chain rule.

    Warnings
    --------
    Operands of the arithmetic methods must be :class:`Variable` or real numbers, and
    at least one of them must be a :class:`Variable`.

    See Also
    --------
    backdiff.function, AutoDiffContext
    """

    __slots__ = ()

    @abstractmethod
    def record[R](self, value: R, update: Callable[[R], None]) -> R:
        """Register `update` to be applied to `value` in the backward pass and return
        `value` unchanged.

        Examples
        --------
        The sine function is implemented as follows.

        >>> def sin(field, x):
        ...     def update(z):
        ...         field.accumulate(x, field.getderiv(z) * np.cos(x.value))
        ...     return field.record(field.variable(np.sin(x.value)), update)
        """
        raise NotImplementedError

    @abstractmethod
    def variable(self, value: Any) -> Variable:
        """Return a new variable owned by the context whose derivative is 0."""
        raise NotImplementedError

    @abstractmethod
    def getderiv(self, variable: Variable) -> np.float64:
        raise NotImplementedError

    @abstractmethod
    def setderiv(self, variable: Variable, value: Any) -> None:
        raise NotImplementedError

    def accumulate(self, variable: Variable, delta: Any) -> None:
        """Add `delta` to the derivative with respect to `variable`."""
        self.setderiv(variable, self.getderiv(variable) + delta)

    @property
    def zero(self) -> Variable:
        return Variable(0.0)

    @property
    def one(self) -> Variable:
        return Variable(1.0)

    def add(self, a: Operand, b: Operand) -> Variable:
        """Return ``a + b``."""
        match a, b:
            case Variable(), Variable():

                def update(z: Variable) -> None:
                    dz = self.getderiv(z)
                    self.accumulate(a, dz)
                    self.accumulate(b, dz)

                return self.record(self.variable(a.value + b.value), update)

            case Variable(), float() | int() | np.floating():
                k = np.float64(b)

                def update(z: Variable) -> None:
                    self.accumulate(a, self.getderiv(z))

                return self.record(self.variable(a.value + k), update)

            case float() | int() | np.floating(), Variable():
                return self.add(b, a)

            case _:
                raise TypeError(_unsupported("+", a, b))

    def sub(self, a: Operand, b: Operand) -> Variable:
        """Return ``a - b``."""
        match a, b:
            case Variable(), Variable():

                def update(z: Variable) -> None:
                    dz = self.getderiv(z)
                    self.accumulate(a, dz)
                    self.accumulate(b, -dz)

                return self.record(self.variable(a.value - b.value), update)

            case Variable(), float() | int() | np.floating():
                k = np.float64(b)

                def update(z: Variable) -> None:
                    self.accumulate(a, self.getderiv(z))

                return self.record(self.variable(a.value - k), update)

            case float() | int() | np.floating(), Variable():
                k = np.float64(a)

                def update(z: Variable) -> None:
                    self.accumulate(b, -self.getderiv(z))

                return self.record(self.variable(k - b.value), update)

            case _:
                raise TypeError(_unsupported("-", a, b))

    def mul(self, a: Operand, b: Operand) -> Variable:
        """Return ``a * b``."""
        match a, b:
            case Variable(), Variable():

                def update(z: Variable) -> None:
                    dz = self.getderiv(z)
                    self.accumulate(a, dz * b.value)
                    self.accumulate(b, dz * a.value)

                return self.record(self.variable(a.value * b.value), update)

            case Variable(), float() | int() | np.floating():
                k = np.float64(b)

                def update(z: Variable) -> None:
                    self.accumulate(a, self.getderiv(z) * k)

                return self.record(self.variable(k * a.value), update)

            case float() | int() | np.floating(), Variable():
                return self.mul(b, a)

            case _:
                raise TypeError(_unsupported("*", a, b))

    def div(self, a: Operand, b: Operand) -> Variable:
        """Return ``a / b``.

        Division by zero is not an error; the result follows IEEE 754.
        """
        match a, b:
            case Variable(), Variable():

                def update(z: Variable) -> None:
                    dz = self.getderiv(z)
                    self.accumulate(a, dz / b.value)
                    self.accumulate(b, -dz * a.value / (b.value * b.value))

                return self.record(self.variable(a.value / b.value), update)

            case Variable(), float() | int() | np.floating():
                k = np.float64(b)

                def update(z: Variable) -> None:
                    self.accumulate(a, self.getderiv(z) / k)

                return self.record(self.variable(a.value / k), update)

            case float() | int() | np.floating(), Variable():
                k = np.float64(a)

                def update(z: Variable) -> None:
                    self.accumulate(b, -self.getderiv(z) * k / (b.value * b.value))

                return self.record(self.variable(k / b.value), update)

            case _:
                raise TypeError(_unsupported("/", a, b))

    def neg(self, a: Variable) -> Variable:
        """Return ``-a``."""
        if not isinstance(a, Variable):
            raise TypeError(f"bad operand type for unary -: {type(a).__name__!r}")

        def update(z: Variable) -> None:
            self.accumulate(a, -self.getderiv(z))

        return self.record(self.variable(-a.value), update)


def _unsupported(op: str, a: object, b: object) -> str:
    return (
        f"unsupported operand type(s) for {op}: "
        f"{type(a).__name__!r} and {type(b).__name__!r}"
    )
