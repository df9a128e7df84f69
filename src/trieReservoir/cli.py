from __future__ import annotations

import argparse
import logging
from typing import Sequence

import numpy as np

from .config import ReadoutConfig, ReservoirConfig, TrainingConfig
from .readouts.softmax_linear import SoftmaxLinearReadout
from .reservoirs.engine import ReservoirEngine
from .reservoirs.factory import SCALING_ALIASES, make_bank, resolve_scaling
from .training import train_readout
from .trie import PrefixTrie
from .utils import input_rng

DEMO_CORPUS = ("hello", "help", "helium", "cat", "dog")
DEMO_SAMPLES = (("hello", 0), ("cat", 1), ("dog", 2), ("help", 3))


def format_report(text: str, probs: Sequence[float]) -> str:
    """Render ``Input: '<text>' -> Output Probs: `` followed by ``%.3f `` per class."""
    return f"Input: '{text}' -> Output Probs: " + "".join(f"{p:.3f} " for p in probs)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Train the trie reservoir readout on the toy corpus and report 'hello'."
    )
    parser.add_argument("--epochs", type=int, default=100)
    parser.add_argument("--learning_rate", "--learning-rate", type=float, default=0.01)
    parser.add_argument("--lr_decay", type=float, default=0.9)
    parser.add_argument("--decay_every", type=int, default=20)
    parser.add_argument("--reservoir_size", type=int, default=64)
    parser.add_argument("--max_depth", type=int, default=16)
    parser.add_argument("--noise_scale", "--noise-scale", type=float, default=0.01)
    parser.add_argument(
        "--scaling", type=str, default="mean_abs", choices=sorted(SCALING_ALIASES)
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--reproducible_noise",
        "--reproducible-noise",
        action="store_true",
        help="seed each forward pass's noise from (seed, input) so embeddings repeat",
    )
    parser.add_argument("--query", type=str, default="hello")
    parser.add_argument("--save_json", "--save-json", type=str, default=None)
    parser.add_argument("--plot", type=str, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main_hello_demo(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.reproducible_noise and args.seed is None:
        parser.error("--reproducible_noise requires --seed")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    reservoir_cfg = ReservoirConfig(
        reservoir_size=args.reservoir_size,
        max_depth=args.max_depth,
        noise_scale=args.noise_scale,
        scaling=resolve_scaling(args.scaling),
    )
    train_cfg = TrainingConfig(
        epochs=args.epochs,
        learning_rate=args.learning_rate,
        lr_decay=args.lr_decay,
        decay_every=args.decay_every,
    )
    rng = np.random.default_rng(args.seed)

    trie = PrefixTrie.from_corpus(
        DEMO_CORPUS,
        max_depth=reservoir_cfg.max_depth,
        alphabet_size=reservoir_cfg.alphabet_size,
    )
    bank = make_bank(reservoir_config=reservoir_cfg, rng=rng)
    readout = SoftmaxLinearReadout.from_config(
        ReadoutConfig(), reservoir_size=reservoir_cfg.reservoir_size, rng=rng
    )
    engine = ReservoirEngine.from_config(reservoir_cfg, rng=rng)

    noise_seed = args.seed if args.reproducible_noise else None
    result = train_readout(
        trie, bank, engine, readout, DEMO_SAMPLES, train_cfg, noise_seed=noise_seed
    )
    result.seed = args.seed

    query_rng = input_rng(noise_seed, args.query) if noise_seed is not None else None
    probs = readout.forward(engine.forward(trie, bank, args.query, rng=query_rng))
    print(format_report(args.query, probs))

    if args.save_json:
        result.save_json(args.save_json)
        print(f"Saved training history to {args.save_json}")
    if args.plot:
        from .plot_utils import plot_training_history, save_figure

        path = save_figure(plot_training_history(result, title="Readout training"), args.plot)
        print(f"Saved plot to {path}")


if __name__ == "__main__":
    main_hello_demo()
