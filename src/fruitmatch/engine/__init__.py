"""Pure match-three board engine.

Dependencies point one way: generator and shuffle use hints, hints and
resolution use matching and moves. Nothing here touches the ECS layer.
"""
from fruitmatch.engine.generator import generate
from fruitmatch.engine.hints import find_all_swaps, find_chain_hint, find_hint, has_available_move
from fruitmatch.engine.matching import find_matches, has_any_match
from fruitmatch.engine.moves import SelectResult, are_adjacent, is_committable, is_valid_swap, try_select
from fruitmatch.engine.resolution import ResolveResult, ResolutionStep, iter_resolve, iter_resolve_swap, resolve, resolve_swap
from fruitmatch.engine.scoring import DEFAULT_RULES, ScoreRules, star_rating
from fruitmatch.engine.shuffler import shuffle

__all__ = [
    "DEFAULT_RULES",
    "ResolveResult",
    "ResolutionStep",
    "ScoreRules",
    "SelectResult",
    "are_adjacent",
    "find_all_swaps",
    "find_chain_hint",
    "find_hint",
    "find_matches",
    "generate",
    "has_any_match",
    "has_available_move",
    "is_committable",
    "is_valid_swap",
    "iter_resolve",
    "iter_resolve_swap",
    "resolve",
    "resolve_swap",
    "shuffle",
    "star_rating",
]
