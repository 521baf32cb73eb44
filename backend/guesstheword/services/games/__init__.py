"""Game domain services: the word round state machine and its helpers.

This package contains pure domain logic that is imported by HTTP routes
and socket handlers, keeping transport concerns separated from the core
game mechanics.
"""

from .session import GameSession, SessionState
from .registry import SessionRegistry, SessionNotFound, RegistryFull

__all__ = ['GameSession', 'SessionState', 'SessionRegistry', 'SessionNotFound', 'RegistryFull']
