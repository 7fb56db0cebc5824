"""Pure scoring and star-rating rules."""
from __future__ import annotations

import math
from dataclasses import dataclass

from fruitmatch.constants import MIN_MATCH_LENGTH


@dataclass(frozen=True)
class ScoreRules:
    """Scoring constants.

    A resolved group of n tiles is worth
    ``floor((n * base_points_per_tile + length_bonus(n)) * combo_multiplier(combo))``,
    further multiplied by cascade_multiplier when the group came from a cascade.
    """

    base_points_per_tile: int = 10
    length_bonus_per_tile: int = 5
    combo_increment: float = 0.1
    cascade_multiplier: float = 1.5
    three_star_score: float = 1.5
    three_star_efficiency: float = 0.8
    two_star_score: float = 1.2
    two_star_efficiency: float = 0.9

    def length_bonus(self, tile_count: int) -> int:
        """Linear bonus for every tile beyond the minimum match length."""
        return max(0, tile_count - MIN_MATCH_LENGTH) * self.length_bonus_per_tile

    def combo_multiplier(self, combo_count: int) -> float:
        return 1.0 + max(0, combo_count) * self.combo_increment

    def group_points(self, tile_count: int, combo_count: int = 0, *, cascade: bool = False) -> int:
        raw = (tile_count * self.base_points_per_tile + self.length_bonus(tile_count)) * self.combo_multiplier(combo_count)
        if cascade:
            raw *= self.cascade_multiplier
        # Absorb float noise from the multipliers before flooring.
        return int(math.floor(round(raw, 6)))

    def star_rating(self, score: int, target_score: int, moves_used: int, move_limit: int) -> int:
        """0-3 stars from score against target and moves used against the limit."""
        if score < target_score:
            return 0
        score_ratio = score / target_score if target_score > 0 else float("inf")
        efficiency = moves_used / move_limit if move_limit > 0 else 1.0
        if score_ratio >= self.three_star_score and efficiency <= self.three_star_efficiency:
            return 3
        if score_ratio >= self.two_star_score or efficiency <= self.two_star_efficiency:
            return 2
        return 1


DEFAULT_RULES = ScoreRules()


def length_bonus(tile_count: int, rules: ScoreRules = DEFAULT_RULES) -> int:
    return rules.length_bonus(tile_count)


def group_points(tile_count: int, combo_count: int = 0, *, cascade: bool = False, rules: ScoreRules = DEFAULT_RULES) -> int:
    return rules.group_points(tile_count, combo_count, cascade=cascade)


def star_rating(score: int, target_score: int, moves_used: int, move_limit: int, rules: ScoreRules = DEFAULT_RULES) -> int:
    return rules.star_rating(score, target_score, moves_used, move_limit)
