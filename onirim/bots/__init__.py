"""
Bots module - Automated players.

Provides:
- ChoicePolicy: Interface for answering prompts
- RandomPolicy / FirstChoicePolicy: Baselines
- GreedyPolicy: Rule-of-thumb player
- PolicyInteraction: Plugs a policy into the turn machine
"""

from .policy import ChoicePolicy, ChoiceDecision, RandomPolicy, FirstChoicePolicy, GreedyPolicy
from .interaction import PolicyInteraction

POLICIES = {
    "random": RandomPolicy,
    "first": FirstChoicePolicy,
    "greedy": GreedyPolicy,
}

__all__ = [
    "ChoicePolicy",
    "ChoiceDecision",
    "RandomPolicy",
    "FirstChoicePolicy",
    "GreedyPolicy",
    "PolicyInteraction",
    "POLICIES",
]
