"""Long-running job support."""

from .poller import JobHandle, wait_for_completion

__all__ = ["JobHandle", "wait_for_completion"]
