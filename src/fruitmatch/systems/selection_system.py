from esper import World

from fruitmatch.constants import MIN_MATCH_LENGTH
from fruitmatch.engine.moves import SelectResult, is_committable, try_select
from fruitmatch.errors import OutOfBoundsError
from fruitmatch.events.bus import (
    EVENT_MOVE_COMMITTED,
    EVENT_SELECTION_CLEARED,
    EVENT_SELECTION_REJECTED,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_RELEASE,
    EVENT_TILE_SELECTED,
    EventBus,
)
from fruitmatch.systems.session_utils import get_board, get_or_create_session_state, get_selection
from fruitmatch.utils.game_state import is_playing

COMMIT_ON_LENGTH = "length"
COMMIT_ON_RELEASE = "release"


class SelectionSystem:
    """Builds a selection chain from tile clicks and commits it as a move.

    With the "length" policy the chain commits the moment it reaches three
    tiles; with "release" it grows until a tile_release event and commits
    then if it is long enough.
    """

    def __init__(self, world: World, event_bus: EventBus, commit_policy: str = COMMIT_ON_LENGTH):
        if commit_policy not in (COMMIT_ON_LENGTH, COMMIT_ON_RELEASE):
            raise ValueError(f"unknown commit policy '{commit_policy}'")
        self.world = world
        self.event_bus = event_bus
        self.commit_policy = commit_policy
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TILE_RELEASE, self.on_tile_release)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if not self._accepting_input():
            return
        board = get_board(self.world)
        if board is None:
            return
        selection = get_selection(self.world)
        pos = (row, col)
        try:
            result = try_select(board, selection.chain, pos)
        except OutOfBoundsError:
            result = SelectResult.REJECTED

        if result is SelectResult.APPEND:
            selection.chain.append(pos)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col, chain=list(selection.chain))
            if self.commit_policy == COMMIT_ON_LENGTH and len(selection.chain) >= MIN_MATCH_LENGTH:
                self._commit()
        elif result is SelectResult.REMOVE_LAST:
            selection.chain.pop()
            self.event_bus.emit(EVENT_TILE_DESELECTED, row=row, col=col, chain=list(selection.chain))
        else:
            self.event_bus.emit(EVENT_SELECTION_REJECTED, row=row, col=col, chain=list(selection.chain))

    def on_tile_release(self, sender, **kwargs):
        if self.commit_policy != COMMIT_ON_RELEASE:
            return
        selection = get_selection(self.world)
        if not selection.chain:
            return
        board = get_board(self.world)
        if self._accepting_input() and board is not None and is_committable(board, selection.chain):
            self._commit()
            return
        chain = list(selection.chain)
        selection.clear()
        self.event_bus.emit(EVENT_SELECTION_CLEARED, reason="too_short", chain=chain)

    def _commit(self):
        selection = get_selection(self.world)
        chain = list(selection.chain)
        selection.clear()
        self.event_bus.emit(EVENT_MOVE_COMMITTED, kind="chain", chain=chain)

    def _accepting_input(self) -> bool:
        if not is_playing(self.world):
            return False
        return not get_or_create_session_state(self.world).cascade_active

    @property
    def chain(self) -> list:
        return list(get_selection(self.world).chain)
