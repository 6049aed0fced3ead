from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LikeToggleOut:
    """
    Result of a like toggle.

    :param target_type: ``"video"``, ``"comment"`` or ``"tweet"``.
    :type target_type: str
    :param target_id: Id of the liked entity.
    :type target_id: str
    :param liked: State after the toggle.
    :type liked: bool
    """

    target_type: str
    target_id: str
    liked: bool
