"""
Plotting Utilities.

Trust scores are absolute values in [0, 1], so no per-step normalization
is applied before plotting.
"""
import os

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.lines import Line2D

from experiments.config import COLORS, TOP_K_HIGHLIGHT, DETECTION_THRESHOLD, get_style


def history_matrix(vehicles, behavior=None):
    """
    Stacks trust histories into a (vehicles, steps) array.
    Histories are truncated to the shortest one.
    """
    selected = [v for v in vehicles.values() if behavior is None or v.behavior_type == behavior]
    if not selected:
        return np.zeros((0, 0))
    n_steps = min(len(v.trust_history) for v in selected)
    return np.array([v.trust_history[:n_steps] for v in selected])


def plot_trust_evolution(vehicles, save_path="results/trust_evolution.png"):
    """
    Plots the history of every vehicle's trust score, with per-behaviour median lines.
    """
    plt.figure(figsize=(10, 6))

    for v in vehicles.values():
        color = COLORS.get(v.behavior_type, 'gray')
        plt.plot(range(len(v.trust_history)), v.trust_history, color=color, alpha=0.1, label='_nolegend_')

    for behavior in COLORS:
        matrix = history_matrix(vehicles, behavior)
        if matrix.shape[0] == 0:
            continue
        median = np.median(matrix, axis=0)
        plt.plot(range(len(median)), median, **get_style(behavior))

    plt.axhline(y=DETECTION_THRESHOLD, color='blue', linestyle='--', label='Detection Threshold')
    plt.ylim(0, 1.05)
    plt.title("Evolution of Trust Scores")
    plt.xlabel("Simulation Step")
    plt.ylabel("Trust Score")
    plt.legend(loc='upper left')
    plt.grid(True, alpha=0.3)

    _save(save_path)


def plot_final_trust_distribution(vehicles, save_path="results/final_rank_distribution.png"):
    """
    Final trust score by rank. The top TOP_K_HIGHLIGHT vehicles are marked.
    """
    data = sorted(vehicles.values(), key=lambda v: v.trust_score, reverse=True)

    ranks = range(1, len(data) + 1)
    scores = [v.trust_score for v in data]
    colors = [COLORS.get(v.behavior_type, 'gray') for v in data]

    plt.figure(figsize=(12, 6))
    plt.scatter(ranks, scores, c=colors, s=100, alpha=0.7)

    if len(data) >= TOP_K_HIGHLIGHT:
        plt.axvline(x=TOP_K_HIGHLIGHT + 0.5, color='blue', linestyle='--', label='Top-k Cutoff')
        plt.axhline(y=scores[TOP_K_HIGHLIGHT - 1], color='gray', linestyle=':', alpha=0.5)

    # Label top-k and bottom-k
    n_vehicles = len(data)
    for i, v in enumerate(data):
        rank = i + 1
        if rank <= TOP_K_HIGHLIGHT or rank > (n_vehicles - TOP_K_HIGHLIGHT):
            plt.annotate(v.id, (rank, scores[i]), fontsize=8, alpha=0.7)

    plt.title("Vehicle Ranking by Final Trust")
    plt.xlabel("Rank (1 = Highest Trust)")
    plt.ylabel("Trust Score")

    custom_lines = [Line2D([0], [0], color=c, marker='o', linestyle='') for c in COLORS.values()]
    plt.legend(custom_lines, [b.title() for b in COLORS])
    plt.grid(True, alpha=0.3)

    _save(save_path)


def plot_detection_history(result, save_path="results/detection_history.png"):
    """Malicious vehicles detected vs. honest vehicles wrongly flagged, per step."""
    detected = result['detected_history']
    false_pos = result['false_positive_history']
    steps = range(1, len(detected) + 1)

    plt.figure(figsize=(10, 6))
    plt.plot(steps, detected, color='darkred', linewidth=2, label='Malicious Detected')
    plt.plot(steps, false_pos, color='darkgreen', linewidth=2, linestyle='--', label='Honest Flagged')
    plt.title(f"Detection below Trust {DETECTION_THRESHOLD}")
    plt.xlabel("Simulation Step")
    plt.ylabel("Vehicles")
    plt.legend(loc='upper left')
    plt.grid(True, alpha=0.3)

    _save(save_path)


def _save(save_path):
    directory = os.path.dirname(save_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    plt.savefig(save_path)
    print(f"Plot saved to {save_path}")
    plt.close()
