"""
Snapshot rendering for search results
"""
import logging
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .game_of_life import Pattern


logger = logging.getLogger(__name__)


def visualize_state(state: np.ndarray,
                    save_path: str,
                    title: str = "Game of Life",
                    figsize: tuple = (8, 8),
                    show_grid: bool = True,
                    highlight: Optional[tuple] = None) -> None:
    """
    Render a single Game of Life state to an image file.

    Args:
        state: State array (H x W)
        save_path: Path of the image to write
        title: Plot title
        figsize: Figure size
        show_grid: Whether to show grid lines
        highlight: Optional (x, y, width, height) box drawn over the state
    """
    fig, ax = plt.subplots(figsize=figsize)

    ax.imshow(state, cmap='binary', interpolation='nearest', vmin=0, vmax=1)
    ax.set_title(title, fontsize=16, pad=10)

    if show_grid:
        h, w = state.shape
        ax.set_xticks(np.arange(-0.5, w, 1), minor=True)
        ax.set_yticks(np.arange(-0.5, h, 1), minor=True)
        ax.grid(which='minor', color='gray', linestyle='-', linewidth=0.5, alpha=0.3)

    if highlight is not None:
        x, y, w, h = highlight
        ax.add_patch(Rectangle((x - 0.5, y - 0.5), w, h,
                               fill=False, edgecolor='red', linewidth=2))

    ax.set_xticks([])
    ax.set_yticks([])

    plt.tight_layout()
    plt.savefig(save_path, dpi=200, bbox_inches='tight')
    plt.close(fig)
    logger.debug("Saved snapshot to %s", save_path)


def visualize_match(name: str, match, save_path: str) -> None:
    """Render the working grid of a successful search with the match boxed."""
    grid: Pattern = match.grid
    visualize_state(
        grid.to_array(),
        save_path,
        title=f"{name}: t={match.tick}, o={match.orientation}",
        highlight=(match.x + match.margin, match.y + match.margin, match.width, match.height),
    )
