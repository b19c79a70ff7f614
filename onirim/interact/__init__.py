"""
Interaction - The prompt/choice boundary.

The turn machine never does I/O itself. It builds a Prompt, hands it
to an InteractionPort and blocks until a Choice comes back. Ports
exist for the terminal, for other threads (queues) and for scripted
replays; bots plug in through bots.PolicyInteraction.
"""

from .prompt import Choice, Prompt, parse_label
from .port import InteractionPort, ChannelInteraction, ScriptedInteraction
from .terminal import TerminalInteraction

__all__ = [
    "Choice",
    "Prompt",
    "parse_label",
    "InteractionPort",
    "ChannelInteraction",
    "ScriptedInteraction",
    "TerminalInteraction",
]
