"""
###############################
Typing (:mod:`backdiff.typing`)
###############################

This module provides type definitions commonly used between modules.

.. autodata:: Constant

.. autodata:: Operand

.. autodata:: Body

"""

from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np

from backdiff.autodiff.variable import Variable

if TYPE_CHECKING:
    from backdiff.autodiff.field import AutoDiffField

type Constant = float | int | np.floating
"""Real number that does not take part in differentiation."""

type Operand = Variable | Constant
"""Argument accepted by the arithmetic operations of :class:`AutoDiffField`."""

type Body = Callable[[AutoDiffField], Variable | Constant]
"""Procedure building an expression in a differentiation context."""
