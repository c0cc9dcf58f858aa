"""Horizontal swipe gesture to decision mapping.

Negative distances are drags to the left (discard), positive to the right
(keep). Both thresholds are symmetric and strict.
"""

from __future__ import annotations

from enum import Enum

from core.models import Disposition

COMMIT_THRESHOLD_PX = 150.0
HINT_THRESHOLD_PX = 50.0


class SwipeDecision(Enum):
    NONE = "none"
    COMMIT_KEEP = "commit_keep"
    COMMIT_DISCARD = "commit_discard"

    @property
    def disposition(self) -> Disposition | None:
        """Decision to apply, or None when the card snaps back."""
        if self is SwipeDecision.COMMIT_KEEP:
            return Disposition.KEEP
        if self is SwipeDecision.COMMIT_DISCARD:
            return Disposition.DISCARD
        return None


def resolve_drag(distance: float, threshold: float = COMMIT_THRESHOLD_PX) -> SwipeDecision:
    """Map the final drag distance to a decision."""
    limit = abs(threshold)
    if distance < -limit:
        return SwipeDecision.COMMIT_DISCARD
    if distance > limit:
        return SwipeDecision.COMMIT_KEEP
    return SwipeDecision.NONE


def drag_hint(distance: float, hint_threshold: float = HINT_THRESHOLD_PX) -> Disposition | None:
    """Which indicator to show while the card is being dragged."""
    limit = abs(hint_threshold)
    if distance < -limit:
        return Disposition.DISCARD
    if distance > limit:
        return Disposition.KEEP
    return None
