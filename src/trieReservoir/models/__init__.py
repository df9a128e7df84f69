from .trie_reservoir_classifier import TrieReservoirClassifier

__all__ = ["TrieReservoirClassifier"]
