from .config import ReadoutConfig, ReservoirConfig, TrainingConfig
from .errors import AllocationFailure, InvalidLabel
from .models import TrieReservoirClassifier
from .readouts import SoftmaxLinearReadout, make_readout
from .reservoirs import ReservoirBank, ReservoirEngine, make_bank
from .results import TrainingResult
from .training import train_readout
from .trie import PrefixTrie, TrieNode

__all__ = [
    "AllocationFailure",
    "InvalidLabel",
    "PrefixTrie",
    "ReadoutConfig",
    "ReservoirBank",
    "ReservoirConfig",
    "ReservoirEngine",
    "SoftmaxLinearReadout",
    "TrainingConfig",
    "TrainingResult",
    "TrieNode",
    "TrieReservoirClassifier",
    "make_bank",
    "make_readout",
    "train_readout",
]
