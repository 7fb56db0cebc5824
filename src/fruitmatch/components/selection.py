from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Position = Tuple[int, int]


@dataclass(slots=True)
class Selection:
    """Tiles picked so far.

    chain: ordered selection chain (chain-selection input).
    pending_swap: first tile of a swap (swap input); None when nothing is picked.
    """

    chain: List[Position] = field(default_factory=list)
    pending_swap: Optional[Position] = None

    def clear(self) -> None:
        self.chain.clear()
        self.pending_swap = None
