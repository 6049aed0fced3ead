import re

_ID_RE = re.compile(r"^[0-9a-f]{32}$")


def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource."""
    return str(actor_id) == str(owner_id)


def is_valid_id(value) -> bool:
    """Return True for a well-formed opaque identifier (32 lowercase hex chars)."""
    return isinstance(value, str) and bool(_ID_RE.match(value))


def can_view_video(video, actor_id) -> bool:
    """Published videos are public; drafts are visible to their owner only."""
    return bool(video.is_published) or (
        actor_id is not None and is_owner(actor_id=actor_id, owner_id=video.owner_id)
    )
