"""Readout models and factories."""

from .base import Readout, coerce_label, coerce_states
from .factory import make_readout
from .softmax_linear import SoftmaxLinearReadout
from .svm_linear import make_linear_svm

__all__ = [
    "Readout",
    "SoftmaxLinearReadout",
    "coerce_label",
    "coerce_states",
    "make_readout",
    "make_linear_svm",
]
