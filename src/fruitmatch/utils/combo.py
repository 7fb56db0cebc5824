from __future__ import annotations

from dataclasses import dataclass, field
from time import monotonic
from typing import Callable


@dataclass(slots=True)
class ComboTracker:
	"""Decides whether a match continues the running combo.

	A match landing within ``window`` seconds of the previous match keeps the
	combo going; a later one (or the first of a level) starts from zero.
	``clock`` defaults to ``time.monotonic`` and can be replaced in tests.
	"""

	window: float = 2.0
	clock: Callable[[], float] | None = field(default=None, repr=False)

	_clock: Callable[[], float] = field(init=False, repr=False)
	_last_match: float | None = field(init=False, default=None, repr=False)

	def __post_init__(self) -> None:
		self._clock = self.clock or monotonic
		self.window = max(0.0, float(self.window))

	def combo_for_move(self, current: int) -> int:
		"""Combo count to hand to the resolution of a move made now."""
		if self._last_match is None:
			return 0
		if (self._clock() - self._last_match) > self.window:
			return 0
		return current

	def record_match(self) -> None:
		self._last_match = self._clock()

	def reset(self) -> None:
		self._last_match = None
