"""
################################################
Mathematical functions (:mod:`backdiff.function`)
################################################

.. currentmodule:: backdiff.function

This module provides differentiable mathematical functions. Each function takes the
differentiation context as its first argument.

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    exp
    log
    pow
    sqr
    sqrt

Trigonometric functions
=======================

.. autosummary::
    :toctree: generated/

    cos
    sin

Notes
-----
Forward values and derivatives are computed with :mod:`numpy` ufuncs, so arguments
outside the domain produce infinities or NaNs instead of exceptions.

"""

import numpy as np

from backdiff.autodiff.field import AutoDiffField
from backdiff.autodiff.variable import Variable
from backdiff.typing import Operand


def sqr(field: AutoDiffField, x: Variable, /) -> Variable:
    """Square.

    Examples
    --------
    >>> from backdiff import Variable, differentiate
    >>> x = Variable(3.0)
    >>> print(differentiate(lambda ctx: sqr(ctx, x)).deriv(x))
    6.0
    """

    def update(z: Variable) -> None:
        field.accumulate(x, field.getderiv(z) * 2 * x.value)

    return field.record(field.variable(x.value * x.value), update)


def sqrt(field: AutoDiffField, x: Variable, /) -> Variable:
    """Square root.

    The derivative is computed from the recorded result, i.e., ``0.5 / sqrt(x)``.

    Examples
    --------
    >>> from backdiff import Variable, differentiate
    >>> x = Variable(4.0)
    >>> print(differentiate(lambda ctx: sqrt(ctx, x)).deriv(x))
    0.25
    """

    def update(z: Variable) -> None:
        field.accumulate(x, field.getderiv(z) * 0.5 / z.value)

    return field.record(field.variable(np.sqrt(x.value)), update)


def pow(field: AutoDiffField, x: Operand, y: Operand, /) -> Variable:
    """`x` raised to the power `y`.

    If `y` is a variable, the result is computed as ``exp(y * log(x))``.

    Examples
    --------
    >>> from backdiff import Variable, differentiate
    >>> x = Variable(2.0)
    >>> y = Variable(3.0)
    >>> r = differentiate(lambda ctx: pow(ctx, x, y))
    >>> print(format(r.value, ".6g"), format(r.deriv(x), ".6g"))
    8 12
    """
    match x, y:
        case Variable(), Variable():
            return exp(field, field.mul(y, log(field, x)))

        case Variable(), float() | int() | np.floating():
            k = np.float64(y)

            def update(z: Variable) -> None:
                field.accumulate(x, field.getderiv(z) * k * np.power(x.value, k - 1))

            return field.record(field.variable(np.power(x.value, k)), update)

        case float() | int() | np.floating(), Variable():
            return exp(field, field.mul(y, np.log(np.float64(x))))

        case _:
            raise TypeError(
                f"unsupported operand type(s) for pow: "
                f"{type(x).__name__!r} and {type(y).__name__!r}"
            )


def exp(field: AutoDiffField, x: Variable, /) -> Variable:
    """Exponential.

    Examples
    --------
    >>> from backdiff import Variable, differentiate
    >>> x = Variable(2.0)
    >>> print(format(differentiate(lambda ctx: exp(ctx, x)).deriv(x), ".6f"))
    7.389056
    """

    def update(z: Variable) -> None:
        field.accumulate(x, field.getderiv(z) * z.value)

    return field.record(field.variable(np.exp(x.value)), update)


def log(field: AutoDiffField, x: Variable, /) -> Variable:
    """Natural logarithm.

    Examples
    --------
    >>> from backdiff import Variable, differentiate
    >>> x = Variable(5.0)
    >>> print(differentiate(lambda ctx: log(ctx, x)).deriv(x))
    0.2
    """

    def update(z: Variable) -> None:
        field.accumulate(x, field.getderiv(z) / x.value)

    return field.record(field.variable(np.log(x.value)), update)


ln = log


def sin(field: AutoDiffField, x: Variable, /) -> Variable:
    """Sine.

    Examples
    --------
    >>> from backdiff import Variable, differentiate
    >>> x = Variable(1.0)
    >>> r = differentiate(lambda ctx: sin(ctx, x))
    >>> print(format(r.value, ".4f"), format(r.deriv(x), ".4f"))
    0.8415 0.5403
    """

    def update(z: Variable) -> None:
        field.accumulate(x, field.getderiv(z) * np.cos(x.value))

    return field.record(field.variable(np.sin(x.value)), update)


def cos(field: AutoDiffField, x: Variable, /) -> Variable:
    """Cosine."""

    def update(z: Variable) -> None:
        field.accumulate(x, -field.getderiv(z) * np.sin(x.value))

    return field.record(field.variable(np.cos(x.value)), update)
