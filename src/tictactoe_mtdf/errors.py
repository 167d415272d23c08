"""Exceptions raised by the game core and the search engine."""


class InvalidStateError(RuntimeError):
    """
    Raised when an operation is called in the wrong lifecycle state.

    Examples: starting a game that is already active, placing a mark in an
    inactive game, or launching a search while another one is in flight.
    These are programming errors on the caller's side and should not be retried.
    """
