"""
RCC Site Estimator
Concrete, reinforcement steel and cost estimation for Indian RCC members.
"""

__version__ = "1.0.0"
__author__ = "RCC Site Estimator"

from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
RULES_DIR = PROJECT_ROOT / "rules"
