"""
#################################
Testing (:mod:`backdiff.testing`)
#################################

.. currentmodule:: backdiff.testing

This module provides utilities to check derivatives against finite differences.

.. autosummary::
    :toctree: generated/

    numdiff
    assert_grad_allclose

"""

from collections.abc import Callable
from typing import Any

import numpy as np
import numpy.typing as npt

from backdiff.autodiff.autodiff import differentiate, grad
from backdiff.autodiff.variable import Variable


def _evaluate(fun: Callable[..., Any], values: list[np.float64]) -> np.float64:
    variables = [Variable(x) for x in values]
    return differentiate(lambda ctx: fun(ctx, *variables)).value


def numdiff(
    fun: Callable[..., Any], *values: Any, step: float = 1e-6
) -> npt.NDArray[np.float64]:
    """Approximate the gradient of `fun` by central differences.

    Parameters
    ----------
    fun : Callable
        Function called as ``fun(ctx, *variables)``.
    *values : float
        Point at which the gradient is approximated.
    step : float, default=1e-6
        Relative step size. The step for `x` is ``step * max(1, abs(x))``.

    Returns
    -------
    numpy.ndarray

    Examples
    --------
    >>> from backdiff import function as bdf
    >>> print(numdiff(lambda ctx, x: bdf.sqr(ctx, x), 3.0).round(6))
    [6.]
    """
    if not values:
        raise ValueError("at least one argument is required")

    point = [np.float64(x) for x in values]
    result = np.empty(len(point), dtype=np.float64)

    for i, x in enumerate(point):
        h = step * max(1.0, abs(float(x)))
        upper = point.copy()
        lower = point.copy()
        upper[i] = x + h
        lower[i] = x - h
        diff = _evaluate(fun, upper) - _evaluate(fun, lower)
        result[i] = diff / (upper[i] - lower[i])

    return result


def assert_grad_allclose(
    fun: Callable[..., Any],
    *values: Any,
    rtol: float = 1e-6,
    atol: float = 1e-9,
    step: float = 1e-6,
) -> None:
    """Raise an AssertionError if the gradient of `fun` disagrees with
    :func:`numdiff`.

    See Also
    --------
    numpy.testing.assert_allclose
    """
    actual = grad(fun)(*values)
    desired = numdiff(fun, *values, step=step)
    np.testing.assert_allclose(actual, desired, rtol=rtol, atol=atol)
