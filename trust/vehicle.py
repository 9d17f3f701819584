"""
Vehicle Entity Module.

Simulated participant of the vehicular network. A vehicle sends messages
(truthful or not, depending on its behaviour) and reports on the messages it
receives from others. The trust score itself lives in the TrustStore; the
vehicle only keeps a history of it for plotting.
"""
import random
from typing import List


class Vehicle:
    BEHAVIOR_HONEST = 'HONEST'
    BEHAVIOR_MALICIOUS = 'MALICIOUS'
    BEHAVIOR_SWING = 'SWING'

    # Configuration
    SWING_CYCLE_LENGTH = 50

    def __init__(self, vehicle_id: str, behavior_type: str = 'HONEST', attack_intensity: float = 0.8,
                 rng: random.Random = None):
        """
        Initialize a vehicle.

        Args:
            vehicle_id (str): Unique identifier (the participant identity).
            behavior_type (str): 'HONEST', 'MALICIOUS', or 'SWING'.
            attack_intensity (float): Probability of a false message when acting maliciously.
                                      0.2 = Low, 0.5 = Medium, 0.9 = High.
            rng (random.Random): Source of randomness, shared with the simulator.
        """
        self.id = vehicle_id
        self.behavior_type = behavior_type
        self.attack_intensity = attack_intensity
        self.is_malicious = (behavior_type != self.BEHAVIOR_HONEST)
        self.rng = rng or random.Random()

        # Score read back from the store after every step
        self.trust_history: List[float] = []

        # Give each swing attacker a random phase offset so they don't flip simultaneously
        self.swing_offset = self.rng.randint(0, self.SWING_CYCLE_LENGTH) if self.behavior_type == self.BEHAVIOR_SWING else 0

    def is_bad_phase(self, step_count: int) -> bool:
        if self.behavior_type == self.BEHAVIOR_MALICIOUS:
            return True
        if self.behavior_type == self.BEHAVIOR_SWING:
            return ((step_count + self.swing_offset) // self.SWING_CYCLE_LENGTH) % 2 == 1
        return False

    def perform_action(self, step_count: int) -> bool:
        """
        Decides whether the message this vehicle broadcasts is truthful.
        """
        if self.is_bad_phase(step_count):
            # False message with probability = attack_intensity
            return self.rng.random() > self.attack_intensity
        # 99% truthful (sensor errors happen)
        return self.rng.random() < 0.99

    def judge(self, message_truthful: bool, sender: 'Vehicle', step_count: int) -> bool:
        """
        The verdict this vehicle reports about a received message.

        Honest receivers report what they observed. Malicious receivers
        bad-mouth honest senders and vouch for fellow attackers.
        """
        if self.behavior_type == self.BEHAVIOR_MALICIOUS:
            return sender.is_malicious
        if self.behavior_type == self.BEHAVIOR_SWING and self.is_bad_phase(step_count):
            return sender.is_malicious
        return message_truthful

    @property
    def trust_score(self) -> float:
        return self.trust_history[-1] if self.trust_history else float('nan')

    def __repr__(self):
        return f"<Vehicle {self.id} | Malicious: {self.is_malicious} | Trust: {self.trust_score:.2f}>"
