"""
Outcome Policies - Turn the two result slots into a winner.

| player1     | player2     | Cost policy    | Binary policy  |
|-------------|-------------|----------------|----------------|
| c1          | absent      | PLAYER1_WON    | PLAYER1_WON    |
| absent      | c2          | PLAYER2_WON    | PLAYER2_WON    |
| c1 < c2     | c2          | PLAYER1_WON    | BOTH_FOUND     |
| c1 > c2     | c2          | PLAYER2_WON    | BOTH_FOUND     |
| c1 == c2    | c2          | BOTH_FOUND     | BOTH_FOUND     |
| absent      | absent      | NEITHER_FOUND  | NEITHER_FOUND  |

The game hub is told player1 won for PLAYER1_WON and BOTH_FOUND. The last
row never reaches the hub: resolve refuses sessions without submissions.

Policies are pure; the same inputs always give the same outcome, which is
what makes a second resolve call return the identical answer.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from .state import Outcome, PlayerResult, U32_MAX


class OutcomePolicy(ABC):
    """Decides a session's outcome from its result slots."""

    name: str = "abstract"
    requires_cost: bool = False

    @abstractmethod
    def decide(
        self,
        player1_result: PlayerResult | None,
        player2_result: PlayerResult | None,
    ) -> Outcome:
        ...

    def validate_cost(self, cost: int | None) -> int | None:
        """Check a submitted cost. Malformed values raise ValueError."""
        if cost is None:
            if self.requires_cost:
                raise ValueError(f"{self.name} policy requires a cost with every submission")
            return None
        if isinstance(cost, bool) or not isinstance(cost, int):
            raise ValueError(f"cost must be an integer, got {cost!r}")
        if not 0 <= cost <= U32_MAX:
            raise ValueError(f"cost out of u32 range: {cost}")
        return cost


class CostTiebreakPolicy(OutcomePolicy):
    """Lower energy wins; an exact tie goes to player1."""

    name = "cost"
    requires_cost = True

    def decide(self, player1_result, player2_result):
        if player1_result is None and player2_result is None:
            return Outcome.NEITHER_FOUND
        if player2_result is None:
            return Outcome.PLAYER1_WON
        if player1_result is None:
            return Outcome.PLAYER2_WON

        cost1, cost2 = player1_result.cost, player2_result.cost
        if cost1 < cost2:
            return Outcome.PLAYER1_WON
        if cost2 < cost1:
            return Outcome.PLAYER2_WON
        return Outcome.BOTH_FOUND


class BinaryVerificationPolicy(OutcomePolicy):
    """Only whether each side verified matters; costs are ignored."""

    name = "binary"

    def decide(self, player1_result, player2_result):
        found1 = player1_result is not None
        found2 = player2_result is not None
        if found1 and found2:
            return Outcome.BOTH_FOUND
        if found1:
            return Outcome.PLAYER1_WON
        if found2:
            return Outcome.PLAYER2_WON
        return Outcome.NEITHER_FOUND


POLICIES: dict[str, type[OutcomePolicy]] = {
    CostTiebreakPolicy.name: CostTiebreakPolicy,
    BinaryVerificationPolicy.name: BinaryVerificationPolicy,
}


def get_policy(name: str) -> OutcomePolicy:
    """Look up a policy by its configuration name."""
    try:
        return POLICIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown outcome policy: {name} (expected one of {sorted(POLICIES)})"
        ) from None


def compute_outcome(
    player1_result: PlayerResult | None,
    player2_result: PlayerResult | None,
    policy: OutcomePolicy | None = None,
) -> Outcome:
    """Convenience wrapper; defaults to the cost policy."""
    return (policy or CostTiebreakPolicy()).decide(player1_result, player2_result)
