"""
Configuration Module.

Centralizes simulation constants, decay/vote choices and visual styles
shared by the benchmark loop, the plotting module and the CLI.
Engine constants (alpha, threshold, K, ...) live in trust/config.py.
"""
import os

# ==========================================
# SIMULATION SETTINGS
# ==========================================
DEFAULT_NUM_VEHICLES = 50
DEFAULT_MALICIOUS_PERCENT = 0.1
DEFAULT_SWING_PERCENT = 0.05
DEFAULT_SEED = 42

# Interactions
DEFAULT_STEPS = 100
INTERACTIONS_PER_STEP_RATIO = 0.5  # If N=50, interactions=25 per step
DEFAULT_ATTACK_INTENSITY = 0.8     # Probability of a false message for a malicious node
RECOMPUTE_INTERVAL = 10            # Steps between two global recomputes
SECONDS_PER_STEP = 1               # Logical clock advance per step

# Detection
DETECTION_THRESHOLD = 0.35         # Trust score below which a node is flagged
TOP_K_HIGHLIGHT = 5                # Top-k vehicles highlighted in the ranking plot

# ==========================================
# ENGINE VARIANTS
# ==========================================
DECAY_MODELS = ['linear', 'exponential', 'none']
VOTE_RULES = ['subject', 'voter']

# ==========================================
# VISUALS
# ==========================================
COLORS = {
    'HONEST': 'green',
    'MALICIOUS': 'red',
    'SWING': 'orange',
}

MEDIAN_COLORS = {
    'HONEST': 'darkgreen',
    'MALICIOUS': 'darkred',
    'SWING': 'darkorange',
}


def get_style(behavior):
    """Returns a dict of matplotlib style arguments for a behaviour type."""
    return {
        'color': MEDIAN_COLORS.get(behavior, 'black'),
        'linewidth': 2,
        'label': f"{behavior.title()} Median",
    }

# ==========================================
# PATHS
# ==========================================
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
RESULTS_DIR = os.path.join(BASE_DIR, '..', 'results')
