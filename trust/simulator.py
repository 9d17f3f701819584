"""
Simulation runner.

Drives the trust program with a population of simulated vehicles:
Interaction -> ReportOutcome (pairwise update) -> periodic RecomputeScores.
Time is a logical clock advanced by the simulator, never wall-clock time.
"""
import logging
import random
from typing import Dict, List

from blockchain.program import InitializeParticipant, RecomputeScores, ReportOutcome, TrustProgram
from blockchain.store import TrustStore
from .config import BASE_INITIAL_TRUST, DEFAULT_PARAMETERS, TrustParameters
from .decay import DecayModel
from .recompute import VoteProvider
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

PROGRAM_ID = 'iov-trust'


class Simulator:
    def __init__(self, num_vehicles=20, percent_malicious=0.2, percent_swing=0.1,
                 attack_intensity=0.8, initial_trust=BASE_INITIAL_TRUST, recompute_interval=10,
                 seconds_per_step=1, start_time=0, params: TrustParameters = DEFAULT_PARAMETERS,
                 decay_model: DecayModel = None, votes: VoteProvider = None, seed=None):
        """
        Args:
            num_vehicles (int): Population size.
            percent_malicious (float): Share of always-malicious vehicles.
            percent_swing (float): Share of swing attackers.
            attack_intensity (float): Probability of a false message while malicious.
            initial_trust (float): Score every vehicle is initialized with.
            recompute_interval (int): Steps between two RecomputeScores (0 disables).
            seconds_per_step (int): Logical clock advance per step.
            start_time (int): Logical clock at initialization.
            seed: Seed for the simulator's random generator.
        """
        self.rng = random.Random(seed)
        self.store = TrustStore(PROGRAM_ID)
        self.program = TrustProgram(self.store, params=params, decay_model=decay_model, votes=votes)
        self.recompute_interval = recompute_interval
        self.seconds_per_step = seconds_per_step
        self.clock = start_time
        self.step_count = 0

        self.vehicles: Dict[str, Vehicle] = {}
        num_malicious = int(num_vehicles * percent_malicious)
        num_swing = int(num_vehicles * percent_swing)

        for i in range(num_vehicles):
            vid = f"V{i:03d}"

            if i < num_malicious:
                behavior = Vehicle.BEHAVIOR_MALICIOUS
            elif i < num_malicious + num_swing:
                behavior = Vehicle.BEHAVIOR_SWING
            else:
                behavior = Vehicle.BEHAVIOR_HONEST

            vehicle = Vehicle(vid, behavior_type=behavior, attack_intensity=attack_intensity, rng=self.rng)
            record = self.program.process_instruction([vid], InitializeParticipant(initial_trust), self.clock)
            vehicle.trust_history.append(record.trust_score)
            self.vehicles[vid] = vehicle

    def simulate_interaction_step(self, num_interactions: int = 20) -> int:
        """
        Advances the clock and lets random pairs exchange one message each.
        The receiver reports on the sender through the program.

        Returns:
            int: Number of reports submitted.
        """
        self.step_count += 1
        self.clock += self.seconds_per_step
        all_ids = list(self.vehicles.keys())
        if len(all_ids) < 2:
            return 0

        submitted = 0
        for _ in range(num_interactions):
            sender_id, receiver_id = self.rng.sample(all_ids, 2)
            sender = self.vehicles[sender_id]
            receiver = self.vehicles[receiver_id]

            message_truthful = sender.perform_action(self.step_count)
            verdict = receiver.judge(message_truthful, sender, self.step_count)

            self.program.process_instruction(
                [receiver_id, sender_id],
                ReportOutcome(receiver_id, sender_id, verdict),
                self.clock,
                signer=receiver_id,
            )
            submitted += 1
        return submitted

    def update_global_trust(self):
        return self.program.process_instruction([], RecomputeScores(), self.clock)

    def record_scores(self):
        for vid, vehicle in self.vehicles.items():
            vehicle.trust_history.append(self.store.get(vid).trust_score)

    def step(self, interactions_per_step: int = 20):
        """One full epoch: interactions, optional recompute, history snapshot."""
        self.simulate_interaction_step(interactions_per_step)
        if self.recompute_interval and self.step_count % self.recompute_interval == 0:
            self.update_global_trust()
        self.record_scores()

    def run(self, steps=100, interactions_per_step=20):
        """
        Runs the simulation for a number of steps.

        Args:
            steps (int): Number of time steps (epochs).
            interactions_per_step (int): Random interactions per step.
        """
        logger.info("Starting simulation: %d vehicles, %d steps.", len(self.vehicles), steps)

        for t in range(steps):
            self.step(interactions_per_step)
            if t % 10 == 0:
                logger.info("Step %d/%d complete.", t, steps)

        logger.info("Simulation complete.")
        return self

    def get_ranked_vehicles(self) -> List[Vehicle]:
        """Returns list of vehicles sorted by current trust (descending)."""
        v_list = list(self.vehicles.values())
        v_list.sort(key=lambda v: v.trust_score, reverse=True)
        return v_list
