from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, Final

import numpy as np
import numpy.typing as npt

_ZERO: Final = np.float64(0.0)


class Variable:
    """Differentiable variable.

    Parameters
    ----------
    value : float
        Value of the variable. It is converted to :class:`numpy.float64`.

    Attributes
    ----------
    value : numpy.float64

    Notes
    -----
    Variables are compared and hashed by identity, not by value. Two distinct
    instances holding the same value are different keys of
    :attr:`DerivationResult.derivs`.

    Examples
    --------
    >>> x = Variable(2)
    >>> x
    Variable(2.0)
    >>> x == Variable(2)
    False
    """

    __slots__ = ("_value",)
    _value: np.float64

    def __init__(self, value: Any):
        if isinstance(value, Variable):
            raise TypeError("value must be a real number, not a variable")

        self._value = np.float64(value)

    @property
    def value(self) -> np.float64:
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({float(self._value)!r})"

    __eq__ = object.__eq__
    __hash__ = object.__hash__


class _ManagedVariable(Variable):
    # Created by a context; the derivative is kept inline instead of in the
    # context's identity-keyed mapping.
    __slots__ = ("d",)
    d: np.float64

    def __init__(self, value: Any):
        super().__init__(value)
        self.d = _ZERO


class DerivationResult(Variable):
    """Result of :func:`differentiate`.

    Parameters
    ----------
    value : float
        Value of the differentiated expression.
    derivs : Mapping[Variable, float]
        Partial derivatives with respect to the input variables. The mapping is
        copied.

    Attributes
    ----------
    value : numpy.float64
    derivs : Mapping[Variable, numpy.float64]
        Read-only snapshot of the partial derivatives.

    Examples
    --------
    >>> from backdiff import differentiate
    >>> x = Variable(3.0)
    >>> y = Variable(4.0)
    >>> r = differentiate(lambda ctx: ctx.div(x, y))
    >>> print(r.deriv(x), r.deriv(y))
    0.25 -0.1875
    >>> r.grad(y, x)
    array([-0.1875,  0.25  ])
    """

    __slots__ = ("_derivs",)
    _derivs: Mapping[Variable, np.float64]

    def __init__(self, value: Any, derivs: Mapping[Variable, Any]):
        super().__init__(value)
        snapshot = {key: np.float64(x) for key, x in derivs.items()}
        self._derivs = MappingProxyType(snapshot)

    @property
    def derivs(self) -> Mapping[Variable, np.float64]:
        return self._derivs

    def deriv(self, variable: Variable) -> np.float64:
        """Return the partial derivative with respect to `variable`.

        Variables that do not appear in the expression have the derivative 0.

        Raises
        ------
        TypeError
            If `variable` is not a variable.
        """
        if not isinstance(variable, Variable):
            raise TypeError(f"expected a variable, got {type(variable).__name__!r}")

        return self._derivs.get(variable, _ZERO)

    def grad(self, *variables: Variable) -> npt.NDArray[np.float64]:
        """Return the gradient for `variables` in the given order.

        Raises
        ------
        ValueError
            If no variable is given.
        TypeError
            If an argument is not a variable.
        """
        if not variables:
            raise ValueError("variable order is not provided for gradient construction")

        return np.array([self.deriv(x) for x in variables], dtype=np.float64)

    def divergence(self) -> np.float64:
        """Return the sum of all the partial derivatives."""
        return sum(self._derivs.values(), _ZERO)

    def __repr__(self) -> str:
        derivs = {key: float(x) for key, x in self._derivs.items()}
        return f"{type(self).__name__}(value={float(self.value)!r}, derivs={derivs!r})"

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._derivs)

    def __contains__(self, variable: object) -> bool:
        return variable in self._derivs
