import logging

from esper import World

from fruitmatch.engine.hints import find_chain_hint
from fruitmatch.engine.shuffler import shuffle
from fruitmatch.events.bus import (
    EVENT_BOARD_SHUFFLED,
    EVENT_MOVES_CHANGED,
    EVENT_SELECTION_CLEARED,
    EVENT_SHUFFLE_REQUEST,
    EventBus,
)
from fruitmatch.systems.session_utils import (
    INPUT_CHAIN,
    INPUT_SWAP,
    get_board,
    get_config,
    get_or_create_session_state,
    get_rng,
    get_selection,
    set_board,
)
from fruitmatch.utils.game_state import is_playing

log = logging.getLogger("fruitmatch.session")

REASON_PLAYER = "player"
REASON_STALEMATE = "stalemate"

# Extra shuffles tried in chain mode when a shuffled board has a swap move but no chain.
_CHAIN_RESHUFFLES = 10


class ShuffleSystem:
    """Replaces the board with a shuffled one.

    Player shuffles cost ``min(shuffle_penalty, moves_remaining - 1)`` moves,
    so a shuffle never spends the last move. Stalemate shuffles are free.
    """

    def __init__(self, world: World, event_bus: EventBus, input_mode: str = INPUT_SWAP):
        self.world = world
        self.event_bus = event_bus
        self.input_mode = input_mode
        self.event_bus.subscribe(EVENT_SHUFFLE_REQUEST, self.on_shuffle_request)

    def on_shuffle_request(self, sender, **payload):
        reason = payload.get("reason", REASON_PLAYER)
        if not is_playing(self.world):
            return
        state = get_or_create_session_state(self.world)
        if state.cascade_active:
            return
        board = get_board(self.world)
        if board is None:
            return

        config = get_config(self.world)
        rng = get_rng(self.world)
        shuffled = shuffle(board, rng=rng, max_attempts=config.engine.shuffle_attempts)
        if self.input_mode == INPUT_CHAIN:
            for _ in range(_CHAIN_RESHUFFLES):
                if find_chain_hint(shuffled) is not None:
                    break
                shuffled = shuffle(shuffled, rng=rng, max_attempts=config.engine.shuffle_attempts)
        set_board(self.world, shuffled)

        selection = get_selection(self.world)
        if selection.chain or selection.pending_swap is not None:
            selection.clear()
            self.event_bus.emit(EVENT_SELECTION_CLEARED, reason="shuffle", chain=[])

        penalty = 0
        if reason != REASON_STALEMATE:
            penalty = max(0, min(config.session.shuffle_penalty, state.moves_remaining - 1))
        if penalty:
            state.moves_remaining -= penalty
            self.event_bus.emit(
                EVENT_MOVES_CHANGED,
                moves_remaining=state.moves_remaining,
                moves_used=state.moves_used,
                reason="shuffle",
            )
        state.shuffles += 1
        log.info("board shuffled (%s), penalty %d", reason, penalty)
        self.event_bus.emit(EVENT_BOARD_SHUFFLED, reason=reason, penalty=penalty, board=shuffled)
