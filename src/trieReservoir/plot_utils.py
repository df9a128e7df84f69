from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from sklearn.decomposition import PCA

from .results import TrainingResult

DEFAULT_LOSS_COLOR = "#21b0ff"
DEFAULT_LR_COLOR = "#ff6f61"


def plot_training_history(
    result: TrainingResult,
    title: str = "",
    *,
    ax: Optional[plt.Axes] = None,
    loss_color: str = DEFAULT_LOSS_COLOR,
    lr_color: str = DEFAULT_LR_COLOR,
) -> plt.Axes:
    """Plot mean epoch loss with the learning-rate schedule on a twin axis."""
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 4))
    epochs = np.arange(len(result.loss_history))
    ax.plot(epochs, result.loss_history, color=loss_color, label="mean loss")
    ax.set_xlabel("epoch")
    ax.set_ylabel("cross-entropy")
    ax_lr = ax.twinx()
    ax_lr.step(epochs, result.lr_history, where="post", color=lr_color, label="learning rate")
    ax_lr.set_ylabel("learning rate")
    ax.set_title(title)
    return ax


def plot_embeddings(
    embeddings: np.ndarray,
    labels: Sequence[str],
    title: str = "",
    *,
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """Scatter reservoir embeddings on their first two principal components."""
    X = np.asarray(embeddings, dtype=float)
    if X.ndim != 2 or X.shape[0] < 2:
        raise ValueError("need at least two embeddings to project")
    coords = PCA(n_components=2).fit_transform(X)
    if ax is None:
        _, ax = plt.subplots(figsize=(5, 5))
    ax.scatter(coords[:, 0], coords[:, 1], color=DEFAULT_LOSS_COLOR)
    for (x, y), label in zip(coords, labels):
        ax.annotate(str(label), (x, y), textcoords="offset points", xytext=(4, 4))
    ax.set_xlabel("PC1")
    ax.set_ylabel("PC2")
    ax.set_title(title)
    return ax


def save_figure(ax: plt.Axes, path: str | Path) -> Path:
    """Write the figure owning ``ax`` to ``path`` and close it."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fig = ax.get_figure()
    fig.tight_layout()
    fig.savefig(p, dpi=120)
    plt.close(fig)
    return p
