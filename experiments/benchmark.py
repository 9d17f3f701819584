"""
Benchmark Runner Module.

Contains the core simulation loop used for gathering statistics and generating graphs.
Separated from run_experiment.py to avoid circular dependencies with plots.py.
"""
import numpy as np

from trust.config import TrustParameters, DEFAULT_PARAMETERS
from trust.decay import get_decay_model
from trust.recompute import SubjectGatedVotes, VoterGatedVotes
from trust.simulator import Simulator
from experiments.config import (
    DEFAULT_STEPS, DEFAULT_ATTACK_INTENSITY, DEFAULT_SEED, DETECTION_THRESHOLD,
    INTERACTIONS_PER_STEP_RATIO, RECOMPUTE_INTERVAL, SECONDS_PER_STEP,
)


def get_vote_provider(rule: str):
    if rule == 'voter':
        return VoterGatedVotes()
    return SubjectGatedVotes()


def run_single_simulation(num_vehicles=50, percent_malicious=0.1, percent_swing=0.0,
                          steps=DEFAULT_STEPS, attack_intensity=DEFAULT_ATTACK_INTENSITY,
                          interactions_per_step=None, recompute_interval=RECOMPUTE_INTERVAL,
                          decay='linear', vote_rule='subject',
                          params: TrustParameters = DEFAULT_PARAMETERS, seed=DEFAULT_SEED):
    """
    Runs one instance of the simulation with configurable parameters.
    Returns:
       - detected_history: list of counts (how many mal vehicles detected per step)
       - false_positive_history: honest vehicles flagged per step
       - total_interactions: total reports submitted
       - ledger_blocks: number of committed write batches
       - vehicles: final vehicle states
    """
    if interactions_per_step is None:
        interactions_per_step = int(num_vehicles * INTERACTIONS_PER_STEP_RATIO)

    sim = Simulator(num_vehicles=num_vehicles,
                    percent_malicious=percent_malicious,
                    percent_swing=percent_swing,
                    attack_intensity=attack_intensity,
                    recompute_interval=recompute_interval,
                    seconds_per_step=SECONDS_PER_STEP,
                    params=params,
                    decay_model=get_decay_model(decay, rate=params.decay_rate),
                    votes=get_vote_provider(vote_rule),
                    seed=seed)

    mal_ids = [v.id for v in sim.vehicles.values() if v.is_malicious]
    honest_ids = [v.id for v in sim.vehicles.values() if not v.is_malicious]

    detected_history = []
    false_positive_history = []
    total_interactions = 0

    for _ in range(steps):
        sim.step(interactions_per_step)
        total_interactions += interactions_per_step

        scores = np.array([sim.vehicles[vid].trust_score for vid in mal_ids])
        detected_history.append(int(np.sum(scores < DETECTION_THRESHOLD)))
        scores = np.array([sim.vehicles[vid].trust_score for vid in honest_ids])
        false_positive_history.append(int(np.sum(scores < DETECTION_THRESHOLD)))

    return {
        'detected_history': detected_history,
        'false_positive_history': false_positive_history,
        'total_interactions': total_interactions,
        'ledger_blocks': len(sim.store.blocks),
        'vehicles': sim.vehicles,
        'simulator': sim,
    }
