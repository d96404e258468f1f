"""
Exceptions raised by norrisbot.

Startup-fatal: StoreUnavailable, IdentityNotFound.
Per-event (logged, never retried): NoJokesAvailable, JokeNotFound, StoreError.
"""


class NorrisBotError(Exception):
    """Base class for all norrisbot errors."""


class StoreError(NorrisBotError):
    """A joke store query failed."""


class StoreUnavailable(StoreError):
    """The joke database file is missing or cannot be opened."""


class NoJokesAvailable(StoreError):
    """The jokes table is empty."""


class JokeNotFound(StoreError):
    """No joke row matches the given id."""

    def __init__(self, joke_id: int):
        super().__init__(f"Joke {joke_id} not found")
        self.joke_id = joke_id


class IdentityNotFound(NorrisBotError):
    """The bot's own member could not be resolved from the roster."""
