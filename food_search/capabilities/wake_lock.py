"""Screen wake lock and cook mode.

Cook mode walks the user through a recipe one step at a time and keeps the
screen awake while it is on. The wake lock is optional: providers report
success as a boolean and never raise into the caller.
"""

from typing import List, Optional, Protocol

from food_search.utils.logger import logger
from food_search.utils.resilience import safe_execute_async


class WakeLock(Protocol):
    """Platform screen wake lock."""

    async def acquire(self) -> bool: ...

    async def release(self) -> bool: ...


class NullWakeLock:
    """Wake lock for platforms without one. Acquiring always reports failure."""

    async def acquire(self) -> bool:
        return False

    async def release(self) -> bool:
        return True


class CookModeSession:
    """Step-by-step recipe view tied to a screen wake lock.

    The lock is held while cook mode is active, released when it is switched
    off or closed, and re-acquired when the view becomes visible again.
    """

    def __init__(self, instructions: Optional[List[str]] = None, wake_lock: Optional[WakeLock] = None) -> None:
        self.instructions: List[str] = list(instructions or [])
        self.wake_lock: WakeLock = wake_lock or NullWakeLock()
        self.active = False
        self.lock_held = False
        self.current_step = 0

    async def _acquire(self) -> bool:
        self.lock_held = bool(
            await safe_execute_async(self.wake_lock.acquire(), "Wake lock request failed", default_return=False)
        )
        return self.lock_held

    async def _release(self) -> None:
        if not self.lock_held:
            return
        await safe_execute_async(self.wake_lock.release(), "Wake lock release failed", default_return=False)
        self.lock_held = False

    async def toggle(self) -> bool:
        """Switch cook mode on or off. The current step is kept across toggles.

        Returns:
            Whether cook mode is now active.
        """
        self.active = not self.active
        if self.active:
            await self._acquire()
        else:
            await self._release()
        logger.debug(f"Cook mode {'on' if self.active else 'off'} (wake lock held: {self.lock_held})")
        return self.active

    async def on_visibility_change(self, visible: bool) -> None:
        """Re-acquire the lock when the view comes back to the foreground."""
        if visible and self.active:
            await self._acquire()

    async def close(self) -> None:
        self.active = False
        await self._release()

    def next_step(self) -> int:
        if self.current_step < len(self.instructions) - 1:
            self.current_step += 1
        return self.current_step

    def previous_step(self) -> int:
        if self.current_step > 0:
            self.current_step -= 1
        return self.current_step

    @property
    def current_instruction(self) -> Optional[str]:
        if not self.instructions:
            return None
        return self.instructions[self.current_step]

    @property
    def progress(self) -> str:
        """Human-readable position, e.g. "Step 2 of 5"."""
        if not self.instructions:
            return "No steps"
        return f"Step {self.current_step + 1} of {len(self.instructions)}"
