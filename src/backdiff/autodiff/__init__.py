"""
###################################################
Automatic differentiation (:mod:`backdiff.autodiff`)
###################################################

.. currentmodule:: backdiff.autodiff

This module provides reverse-mode automatic differentiation.

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    differentiate
    deriv
    grad
    value_and_grad

Variables and results
---------------------

.. autosummary::
    :toctree: generated/

    Variable
    DerivationResult

Contexts
--------

.. autosummary::
    :toctree: generated/

    AutoDiffField
    AutoDiffContext
    Tape
    TapeEntry

"""

from .autodiff import deriv, differentiate, grad, value_and_grad
from .context import AutoDiffContext
from .field import AutoDiffField
from .tape import Tape, TapeEntry
from .variable import DerivationResult, Variable

__all__ = [
    "deriv",
    "differentiate",
    "grad",
    "value_and_grad",
    "AutoDiffContext",
    "AutoDiffField",
    "Tape",
    "TapeEntry",
    "DerivationResult",
    "Variable",
]
