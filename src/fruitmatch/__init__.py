"""Fruit Match: a connect-fruits match-three engine.

The pure board engine lives in ``fruitmatch.engine``; the event-driven game
session (esper world + blinker event bus) lives in ``fruitmatch.systems`` and
is wired together by ``fruitmatch.game.create_game``.
"""

__version__ = "0.1.0"
