from . import function
from .autodiff import (
    DerivationResult,
    Variable,
    deriv,
    differentiate,
    grad,
    value_and_grad,
)

__all__ = [
    "function",
    "DerivationResult",
    "Variable",
    "deriv",
    "differentiate",
    "grad",
    "value_and_grad",
]
