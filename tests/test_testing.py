import numpy as np
import pytest

from backdiff import function as bdf
from backdiff.testing import assert_grad_allclose, numdiff


def test_numdiff():
    r = numdiff(lambda ctx, x, y: ctx.mul(bdf.sqr(ctx, x), y), 3.0, 2.0)
    np.testing.assert_allclose(r, [12.0, 9.0], rtol=1e-8)

    with pytest.raises(ValueError):
        numdiff(lambda ctx: 1.0)


def test_assert_grad_allclose():
    def wrong(ctx, x):
        def update(z):
            ctx.accumulate(x, ctx.getderiv(z) * 3.0)

        return ctx.record(ctx.variable(x.value * x.value), update)

    assert_grad_allclose(bdf.sqr, 2.0)

    with pytest.raises(AssertionError):
        assert_grad_allclose(wrong, 2.0)
