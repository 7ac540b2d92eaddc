import logging
from collections.abc import Callable
from typing import Any

import numpy as np
import numpy.typing as npt

from backdiff.autodiff.context import AutoDiffContext
from backdiff.autodiff.variable import DerivationResult, Variable
from backdiff.typing import Body

logger = logging.getLogger(__name__)


def differentiate(body: Body) -> DerivationResult:
    """Evaluate an expression and its partial derivatives by reverse-mode automatic
    differentiation.

    Parameters
    ----------
    body : Callable
        Procedure that receives a fresh :class:`AutoDiffContext` and returns the
        output variable of the expression. A real number is regarded as a constant.

    Returns
    -------
    DerivationResult
        Value of the expression and the partial derivatives with respect to the
        variables declared outside `body`.

    Warnings
    --------
    The recorded graph is exactly the sequence of operations executed by `body`, so
    conditional branches are not differentiated.

    Examples
    --------
    >>> from backdiff import function as bdf
    >>> x = Variable(2)
    >>> y = differentiate(lambda ctx: ctx.add(ctx.add(bdf.sqr(ctx, x), ctx.mul(5, x)), 3))
    >>> print(y.value, y.deriv(x))
    17.0 9.0

    Division by zero and logarithms of non-positive numbers propagate infinities and
    NaNs instead of raising exceptions.

    >>> r = differentiate(lambda ctx: bdf.log(ctx, Variable(0.0)))
    >>> print(r.value)
    -inf
    """
    ctx = AutoDiffContext()

    with np.errstate(all="ignore"):
        match body(ctx):
            case Variable() as result:
                pass

            case float() | int() | np.floating() as value:
                result = ctx.variable(value)

            case other:
                raise TypeError(
                    f"expression must be a variable or a real number, not {type(other).__name__!r}"
                )

        ctx.setderiv(result, 1.0)
        count = ctx.run_backward()

    logger.debug(
        "backward pass replayed %d operations for %d input variables",
        count,
        len(ctx.derivatives),
    )
    return DerivationResult(result.value, ctx.derivatives)


def deriv(fun: Callable[..., Any]) -> Callable[[Any], np.float64]:
    """Return a function that evaluates the derivative of the univariate scalar-valued
    function.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It is called as ``fun(ctx, x)``.

    Returns
    -------
    Callable
        Derivative of `fun`.

    Examples
    --------
    >>> from backdiff import function as bdf
    >>> df = deriv(lambda ctx, x: ctx.mul(x, bdf.sin(ctx, x)))
    >>> print(format(df(1.2), ".6g"))
    1.36687
    """

    def result(x):
        var = Variable(x)
        return differentiate(lambda ctx: fun(ctx, var)).deriv(var)

    return result


def grad(fun: Callable[..., Any]) -> Callable[..., npt.NDArray[np.float64]]:
    """Return a function that evaluates the gradient of the multivariate scalar-valued
    function.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It is called as ``fun(ctx, *variables)``.

    Returns
    -------
    Callable
        Gradient of `fun`, returning a :class:`numpy.ndarray`.

    Examples
    --------
    >>> from backdiff import function as bdf
    >>> df = grad(lambda ctx, x, y: bdf.sqrt(ctx, ctx.add(ctx.mul(x, y), 3)))
    >>> print(df(0.5, 1.0))
    [0.26726124 0.13363062]
    """

    def result(*args):
        return value_and_grad(fun)(*args)[1]

    return result


def value_and_grad(
    fun: Callable[..., Any],
) -> Callable[..., tuple[np.float64, npt.NDArray[np.float64]]]:
    """Return a function that evaluates both the value and the gradient of the
    multivariate scalar-valued function.

    See Also
    --------
    grad
    """

    def result(*args):
        if not args:
            raise ValueError("at least one argument is required")

        variables = tuple(Variable(x) for x in args)
        r = differentiate(lambda ctx: fun(ctx, *variables))
        return r.value, r.grad(*variables)

    return result
