"""Cancellation token passed into each fetch."""

import threading


class CancellationToken:
    """Marks one search request; cancelled once a newer request supersedes it."""
    
    def __init__(self, generation: int = 0):
        self.generation = generation
        self._cancelled = threading.Event()
    
    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()
    
    def cancel(self):
        self._cancelled.set()
    
    def __repr__(self) -> str:
        return f"CancellationToken(generation={self.generation}, cancelled={self.cancelled})"
