import math

import mpmath
import pytest

from backdiff import function as bdf
from backdiff.autodiff.autodiff import differentiate
from backdiff.autodiff.variable import Variable
from backdiff.testing import assert_grad_allclose


@pytest.mark.parametrize(
    "fun, ref, x",
    [
        (bdf.sqr, lambda t: t**2, 1.7),
        (bdf.sqrt, mpmath.sqrt, 2.3),
        (bdf.exp, mpmath.exp, -0.4),
        (bdf.log, mpmath.log, 3.1),
        (bdf.ln, mpmath.log, 0.2),
        (bdf.sin, mpmath.sin, 0.7),
        (bdf.cos, mpmath.cos, 0.7),
        (lambda ctx, x: bdf.pow(ctx, x, 2.5), lambda t: t**2.5, 1.3),
        (lambda ctx, x: bdf.pow(ctx, x, -3), lambda t: t**-3, 0.8),
        (lambda ctx, x: bdf.pow(ctx, 2.0, x), lambda t: 2**t, 1.1),
    ],
)
def test_unary(fun, ref, x):
    var = Variable(x)
    r = differentiate(lambda ctx: fun(ctx, var))
    assert pytest.approx(r.value, 1e-12) == float(ref(mpmath.mpf(x)))
    assert pytest.approx(r.deriv(var), 1e-9) == float(mpmath.diff(ref, x))
    assert_grad_allclose(fun, x)


def test_pow_variable_exponent():
    x = Variable(2.0)
    y = Variable(3.0)
    r = differentiate(lambda ctx: bdf.pow(ctx, x, y))
    assert pytest.approx(r.value, 1e-12) == 8.0
    assert pytest.approx(r.deriv(x), 1e-12) == 12.0
    assert pytest.approx(r.deriv(y), 1e-12) == 8.0 * math.log(2.0)


def test_pow_unsupported():
    x = Variable(2.0)

    with pytest.raises(TypeError):
        differentiate(lambda ctx: bdf.pow(ctx, 2.0, 3.0))

    with pytest.raises(TypeError):
        differentiate(lambda ctx: bdf.pow(ctx, x, "3"))


def test_sqrt_near_zero():
    for x in (1e-12, 1e-200, 5e-324):
        var = Variable(x)
        r = differentiate(lambda ctx: bdf.sqrt(ctx, var))
        expected = mpmath.mpf(0.5) / mpmath.sqrt(mpmath.mpf(x))
        assert pytest.approx(r.deriv(var), 1e-12) == float(expected)

    var = Variable(0.0)
    r = differentiate(lambda ctx: bdf.sqrt(ctx, var))
    assert r.value == 0.0
    assert r.deriv(var) == math.inf


def test_composition():
    def fun(ctx, x, y):
        a = bdf.sin(ctx, ctx.mul(x, y))
        b = bdf.exp(ctx, ctx.div(x, y))
        c = bdf.log(ctx, ctx.add(bdf.sqr(ctx, x), y))
        return ctx.sub(ctx.add(a, b), c)

    assert_grad_allclose(fun, 0.9, 1.7)
    assert_grad_allclose(fun, -1.3, 2.2)


def test_composition_with_power():
    def fun(ctx, x, y, z):
        a = bdf.pow(ctx, ctx.add(x, 1.5), y)
        b = bdf.cos(ctx, ctx.mul(z, bdf.sqrt(ctx, x)))
        return ctx.div(ctx.mul(a, b), ctx.sub(3, z))

    assert_grad_allclose(fun, 0.4, 1.3, 0.6)
