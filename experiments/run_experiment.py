"""
Main Experiment Runner.

Runs one seeded simulation of the trust program and prints:
 A. Final trust statistics per behaviour type
 B. Detection performance at DETECTION_THRESHOLD
 C. Ledger statistics
Plots are written to the results directory unless --no-plots is given.
"""
import argparse
import logging
import os
import sys

import numpy as np

# Allow imports from parent directory
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from trust.config import (
    TrustParameters, FEEDBACK_WEIGHT, TRUST_THRESHOLD, DAMPING_ALPHA,
    BASE_INITIAL_TRUST, RECOMPUTE_ITERATIONS, DECAY_RATE,
)
from trust.errors import TrustError
from experiments.benchmark import run_single_simulation
from experiments.config import (
    DEFAULT_NUM_VEHICLES, DEFAULT_MALICIOUS_PERCENT, DEFAULT_SWING_PERCENT, DEFAULT_STEPS,
    DEFAULT_ATTACK_INTENSITY, DEFAULT_SEED, RECOMPUTE_INTERVAL, DETECTION_THRESHOLD,
    DECAY_MODELS, VOTE_RULES, RESULTS_DIR,
)


def calculate_statistics(result):
    vehicles = result['vehicles']

    print("\n" + "=" * 50)
    print("       EXPERIMENT RESULTS & STATISTICS")
    print("=" * 50)

    # --- A. Final Trust Statistics (per vehicle type) ---
    print("\n[A] Final Trust Statistics:")
    stats = {'HONEST': [], 'SWING': [], 'MALICIOUS': []}
    for v in vehicles.values():
        stats.setdefault(v.behavior_type, []).append(v.trust_score)

    print(f"{'Vehicle Type':<15} {'Count':<8} {'Avg Final Trust':<20} {'Std Dev':<15}")
    print("-" * 58)
    for v_type, scores in stats.items():
        if scores:
            print(f"{v_type:<15} {len(scores):<8} {np.mean(scores):.4f}{'':<14} {np.std(scores):.4f}")

    # --- B. Detection Performance ---
    print(f"\n[B] Detection Performance (threshold {DETECTION_THRESHOLD}):")
    tp, fp, tn, fn = 0, 0, 0, 0
    for v in vehicles.values():
        predicted_mal = v.trust_score < DETECTION_THRESHOLD
        if v.is_malicious and predicted_mal: tp += 1
        if not v.is_malicious and predicted_mal: fp += 1
        if not v.is_malicious and not predicted_mal: tn += 1
        if v.is_malicious and not predicted_mal: fn += 1

    tpr = tp / (tp + fn) if (tp + fn) > 0 else 0
    fpr = fp / (fp + tn) if (fp + tn) > 0 else 0
    precision = tp / (tp + fp) if (tp + fp) > 0 else 0

    print(f"{'Metric':<25} {'Value':<10}")
    print("-" * 35)
    print(f"{'True Positive Rate (TPR)':<25} {tpr*100:.2f}%")
    print(f"{'False Positive Rate (FPR)':<25} {fpr*100:.2f}%")
    print(f"{'Precision':<25} {precision*100:.2f}%")

    # --- C. Ledger ---
    print("\n[C] Ledger:")
    print(f"{'Reports submitted':<25} {result['total_interactions']}")
    print(f"{'Committed blocks':<25} {result['ledger_blocks']}")

    return {'tpr': tpr, 'fpr': fpr, 'precision': precision}


def build_parser():
    parser = argparse.ArgumentParser(description="IoV Trust Simulation Runner")
    parser.add_argument('-n', '--vehicles', type=int, default=DEFAULT_NUM_VEHICLES)
    parser.add_argument('-m', '--malicious', type=float, default=DEFAULT_MALICIOUS_PERCENT,
                        help="Share of malicious vehicles.")
    parser.add_argument('--swing', type=float, default=DEFAULT_SWING_PERCENT,
                        help="Share of swing attackers.")
    parser.add_argument('--steps', type=int, default=DEFAULT_STEPS)
    parser.add_argument('--intensity', type=float, default=DEFAULT_ATTACK_INTENSITY,
                        help="Probability of a false message while malicious.")
    parser.add_argument('--recompute-every', type=int, default=RECOMPUTE_INTERVAL,
                        help="Steps between global recomputes (0 disables).")
    parser.add_argument('--decay', choices=DECAY_MODELS, default='linear')
    parser.add_argument('--votes', choices=VOTE_RULES, default='subject',
                        help="Apply the trust threshold to the subject or to the voter.")
    parser.add_argument('--seed', type=int, default=DEFAULT_SEED)

    engine = parser.add_argument_group('engine constants')
    engine.add_argument('--feedback-weight', type=float, default=FEEDBACK_WEIGHT)
    engine.add_argument('--threshold', type=float, default=TRUST_THRESHOLD)
    engine.add_argument('--alpha', type=float, default=DAMPING_ALPHA)
    engine.add_argument('--base-trust', type=float, default=BASE_INITIAL_TRUST)
    engine.add_argument('--iterations', type=int, default=RECOMPUTE_ITERATIONS)
    engine.add_argument('--decay-rate', type=float, default=DECAY_RATE)

    parser.add_argument('--results-dir', default=RESULTS_DIR)
    parser.add_argument('--no-plots', action='store_true', help="Skip writing plots.")
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help="-v for progress logging, -vv for every instruction.")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if args.verbose == 1:
        # Per-instruction lines are only useful at -vv
        logging.getLogger('blockchain').setLevel(logging.WARNING)

    try:
        params = TrustParameters(
            feedback_weight=args.feedback_weight,
            trust_threshold=args.threshold,
            alpha=args.alpha,
            base_initial_trust=args.base_trust,
            iterations=args.iterations,
            decay_rate=args.decay_rate,
        )
        print(f">> Simulation: {args.vehicles} vehicles, {args.steps} steps, {params!r}")
        result = run_single_simulation(
            num_vehicles=args.vehicles,
            percent_malicious=args.malicious,
            percent_swing=args.swing,
            steps=args.steps,
            attack_intensity=args.intensity,
            recompute_interval=args.recompute_every,
            decay=args.decay,
            vote_rule=args.votes,
            params=params,
            seed=args.seed,
        )
    except TrustError as e:
        print(f"Error: {e}")
        return 1

    calculate_statistics(result)

    if not args.no_plots:
        # matplotlib only loaded when plotting
        from experiments.plots import (
            plot_trust_evolution, plot_final_trust_distribution, plot_detection_history,
        )
        print("\nGenerating plots...")
        plot_trust_evolution(result['vehicles'], os.path.join(args.results_dir, 'trust_evolution.png'))
        plot_final_trust_distribution(result['vehicles'], os.path.join(args.results_dir, 'final_rank_distribution.png'))
        plot_detection_history(result, os.path.join(args.results_dir, 'detection_history.png'))
        print(f"Check {args.results_dir} for plots.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
