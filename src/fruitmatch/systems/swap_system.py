from typing import Optional, Tuple

from esper import World

from fruitmatch.engine.moves import are_adjacent, is_valid_swap
from fruitmatch.errors import OutOfBoundsError
from fruitmatch.events.bus import (
    EVENT_MOVE_COMMITTED,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
    EventBus,
)
from fruitmatch.systems.session_utils import get_board, get_or_create_session_state, get_selection
from fruitmatch.utils.game_state import is_playing


class SwapSystem:
    """Classic swap input: click a tile, then click a neighbour to swap them."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    @property
    def selected(self) -> Optional[Tuple[int, int]]:
        return get_selection(self.world).pending_swap

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if not self._accepting_input():
            return
        board = get_board(self.world)
        if board is None or not board.in_bounds((row, col)):
            return
        selection = get_selection(self.world)
        pos = (row, col)
        if selection.pending_swap is None:
            if not board.is_fruit(pos):
                return
            selection.pending_swap = pos
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col, chain=[pos])
        elif selection.pending_swap == pos:
            selection.pending_swap = None
            self.event_bus.emit(EVENT_TILE_DESELECTED, row=row, col=col, chain=[])
        elif are_adjacent(selection.pending_swap, pos):
            src = selection.pending_swap
            selection.pending_swap = None
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=pos)
        elif board.is_fruit(pos):
            # Change selection to new tile
            selection.pending_swap = pos
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col, chain=[pos])

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        if not self._accepting_input():
            return
        board = get_board(self.world)
        if board is None:
            return
        src, dst = tuple(src), tuple(dst)
        try:
            valid = is_valid_swap(board, src, dst)
        except OutOfBoundsError:
            valid = False
        if not valid:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst)
            return
        self.event_bus.emit(EVENT_MOVE_COMMITTED, kind="swap", src=src, dst=dst)

    def _accepting_input(self) -> bool:
        if not is_playing(self.world):
            return False
        return not get_or_create_session_state(self.world).cascade_active
