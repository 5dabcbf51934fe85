"""
Curve Set Analysis

Summary statistics and spacing checks for a placed set of curves.

Spacing is measured between samples of *different* curves only; consecutive
samples of one curve are step_length apart and are not constrained by d_sep.
"""

import numpy as np
from scipy.spatial import cKDTree


def _stack_points(curves):
    """All samples with the index of their curve."""
    if not curves:
        return np.empty((0, 2)), np.empty(0, dtype=np.int64)
    points = np.concatenate([c.points() for c in curves])
    labels = np.concatenate(
        [np.full(c.steps_taken, i, dtype=np.int64) for i, c in enumerate(curves)]
    )
    return points, labels


def spacing_violations(curves, min_distance):
    """
    Pairs of samples from different curves closer than min_distance.

    Parameters
    ----------
    curves : list of Curve
        Placed curves
    min_distance : float
        Required separation

    Returns
    -------
    violations : list of tuple
        (curve_a, curve_b, distance) with curve_a < curve_b, sorted by distance
    """
    points, labels = _stack_points(curves)
    if len(points) < 2:
        return []

    tree = cKDTree(points)
    pairs = tree.query_pairs(np.nextafter(min_distance, 0.0), output_type="ndarray")

    violations = []
    for i, j in pairs:
        if labels[i] == labels[j]:
            continue
        dist = float(np.linalg.norm(points[i] - points[j]))
        a, b = sorted((int(labels[i]), int(labels[j])))
        violations.append((curves[a].curve_id, curves[b].curve_id, dist))

    violations.sort(key=lambda v: v[2])
    return violations


def minimum_separation(curves):
    """
    Smallest distance between samples of two different curves.

    A single tree is queried for the ``max_steps + 1`` nearest samples of
    every point. One curve holds at most ``max_steps`` of them, so the first
    sample from another curve in that list is the nearest one.

    Returns
    -------
    d_min : float
        ``inf`` when fewer than two curves are given
    """
    if len(curves) < 2:
        return np.inf

    points, labels = _stack_points(curves)
    k = min(len(points), max(c.steps_taken for c in curves) + 1)

    dist, idx = cKDTree(points).query(points, k=k)
    other = labels[idx] != labels[:, None]
    if not np.any(other):
        return np.inf

    return float(np.min(dist[other]))


def curve_statistics(curves):
    """
    Basic counts for a curve set.

    Returns
    -------
    stats : dict
        n_curves, total_points, mean_steps, min_steps, max_steps,
        polyline_length (sum of segment lengths over all curves)
    """
    if not curves:
        return {
            "n_curves": 0,
            "total_points": 0,
            "mean_steps": 0.0,
            "min_steps": 0,
            "max_steps": 0,
            "polyline_length": 0.0,
        }

    steps = np.array([c.steps_taken for c in curves])
    length = 0.0
    for c in curves:
        if c.steps_taken > 1:
            ordered = ordered_points(c)
            length += float(np.sum(np.linalg.norm(np.diff(ordered, axis=0), axis=1)))

    return {
        "n_curves": len(curves),
        "total_points": int(steps.sum()),
        "mean_steps": float(steps.mean()),
        "min_steps": int(steps.min()),
        "max_steps": int(steps.max()),
        "polyline_length": length,
    }


def ordered_points(curve):
    """
    Samples in polyline order, from the backward end to the forward end.

    The backward samples (tag 0, after the seed) are reversed and followed by
    the seed and the forward samples (tag 1).

    Returns
    -------
    points : ndarray
        Shape (steps_taken, 2)
    """
    points = curve.points()
    direction = curve.direction
    backward = points[1:][direction[1:] == 0][::-1]
    forward = points[1:][direction[1:] == 1]
    return np.concatenate((backward, points[:1], forward))
