"""
Iterative cluster refinement.

Assigns working pixels to their nearest centroid (within a cutoff), recomputes
centroids as cluster means and repeats until the total centroid movement
falls below the convergence threshold or the iteration cap is reached.
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from loguru import logger

from palette_extractor.config import config
from .pixels import pairwise_distances

UNASSIGNED = -1


@dataclass
class ClusteringResult:
    """Final state of the refinement loop."""
    centroids: np.ndarray
    labels: np.ndarray
    iterations: int
    converged: bool

    def clusters(self, pixels: np.ndarray) -> List[np.ndarray]:
        """Member pixels of each cluster, index-aligned with the centroids."""
        return build_clusters(pixels, self.labels, len(self.centroids))


def assign_clusters(pixels: np.ndarray,
                    centroids: np.ndarray,
                    cutoff: Optional[float] = None) -> np.ndarray:
    """
    Assign each pixel to its nearest centroid.

    Ties go to the lowest centroid index. Pixels whose nearest centroid is not
    closer than ``cutoff`` stay unassigned for this round.

    Returns:
        Label array of shape (N,) holding a centroid index or UNASSIGNED
    """
    if cutoff is None:
        cutoff = config.ASSIGNMENT_CUTOFF

    if len(centroids) == 0:
        return np.full(len(pixels), UNASSIGNED, dtype=np.int64)

    distances = pairwise_distances(pixels, centroids)
    nearest = distances.argmin(axis=1)
    nearest_distance = distances[np.arange(len(pixels)), nearest]

    return np.where(nearest_distance < cutoff, nearest, UNASSIGNED).astype(np.int64)


def build_clusters(pixels: np.ndarray, labels: np.ndarray, k: int) -> List[np.ndarray]:
    """Group pixels by label, preserving input order inside each cluster."""
    return [pixels[labels == i] for i in range(k)]


def compute_centroids(pixels: np.ndarray,
                      labels: np.ndarray,
                      previous: np.ndarray) -> np.ndarray:
    """
    Recompute each centroid as the mean of its members, clamped to [0, 255].

    A cluster without members keeps its previous centroid.
    """
    updated = previous.copy()
    for i in range(len(previous)):
        members = pixels[labels == i]
        if len(members):
            updated[i] = np.clip(members.mean(axis=0), 0, 255)
    return updated


def total_movement(previous: np.ndarray, updated: np.ndarray) -> float:
    """Sum of the distances every centroid moved."""
    diff = updated - previous
    return float(np.sum(np.sqrt(np.sum(diff * diff, axis=1))))


def refine_clusters(pixels: np.ndarray,
                    seeds: np.ndarray,
                    cutoff: Optional[float] = None,
                    max_iterations: Optional[int] = None,
                    convergence_threshold: Optional[float] = None) -> ClusteringResult:
    """
    Run the assign/update loop from the given seeds.

    Convergence is declared when the summed movement of all centroids in one
    iteration is below ``convergence_threshold``. Hitting ``max_iterations``
    first is not an error; the last state is returned as is.

    Args:
        pixels: Working pixel set (N, 4)
        seeds: Initial centroids (K, 4)
        cutoff: Maximum assignment distance (default from config)
        max_iterations: Iteration cap (default from config)
        convergence_threshold: Total movement threshold (default from config)

    Returns:
        ClusteringResult with final centroids, labels and loop statistics
    """
    if max_iterations is None:
        max_iterations = config.MAX_ITERATIONS
    if convergence_threshold is None:
        convergence_threshold = config.CONVERGENCE_THRESHOLD

    centroids = np.asarray(seeds, dtype=np.float64).copy()
    labels = assign_clusters(pixels, centroids, cutoff)

    iterations = 0
    converged = False
    while not converged and iterations < max_iterations:
        iterations += 1
        updated = compute_centroids(pixels, labels, centroids)
        moved = total_movement(centroids, updated)
        converged = moved < convergence_threshold

        centroids = updated
        labels = assign_clusters(pixels, centroids, cutoff)
        logger.debug(f"Iteration {iterations}: centroids moved {moved:.4f}")

    if converged:
        logger.debug(f"Clustering converged after {iterations} iterations")
    else:
        logger.debug(f"Clustering stopped at iteration cap {max_iterations} without converging")

    return ClusteringResult(
        centroids=centroids,
        labels=labels,
        iterations=iterations,
        converged=converged,
    )
