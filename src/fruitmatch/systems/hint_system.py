from esper import World

from fruitmatch.engine.hints import find_chain_hint, find_hint
from fruitmatch.events.bus import EVENT_HINT_FOUND, EVENT_HINT_REQUEST, EVENT_HINT_UNAVAILABLE, EventBus
from fruitmatch.systems.session_utils import INPUT_CHAIN, INPUT_SWAP, get_board
from fruitmatch.utils.game_state import is_playing


class HintSystem:
    """Answers hint requests with a move suited to the session's input mode."""

    def __init__(self, world: World, event_bus: EventBus, input_mode: str = INPUT_SWAP):
        self.world = world
        self.event_bus = event_bus
        self.input_mode = input_mode
        self.event_bus.subscribe(EVENT_HINT_REQUEST, self.on_hint_request)

    def on_hint_request(self, sender, **payload):
        if not is_playing(self.world):
            return
        board = get_board(self.world)
        if board is None:
            return
        if self.input_mode == INPUT_CHAIN:
            chain = find_chain_hint(board)
            if chain is not None:
                self.event_bus.emit(EVENT_HINT_FOUND, kind="chain", positions=chain)
                return
        else:
            swap = find_hint(board)
            if swap is not None:
                self.event_bus.emit(EVENT_HINT_FOUND, kind="swap", positions=list(swap))
                return
        self.event_bus.emit(EVENT_HINT_UNAVAILABLE)
