"""
Aether Grid - Two-player zero-knowledge treasure duel engine.

Each player proves they know the treasure location behind a public,
session-bound commitment. The engine coordinates the session:
- Per-session commitments (supplied or derived)
- One verified submission per player, none after resolution
- Deterministic winner with an energy tiebreak
- Exactly-once reporting to the game hub
"""

__version__ = "0.1.0"
