"""
Onirim - Solitaire Rules Engine

A deck-driven turn engine for Shadi Torbey's solitaire card game Onirim.
The engine provides:
- Card and pile model for the 76-card deck
- Hand filling with Limbo diversion
- Turn state machine (door discovery, prophecy, nightmares)
- Prompt/choice interaction boundary with terminal, channel and bot adapters
- Board snapshots for observers
"""

__version__ = "0.1.0"
