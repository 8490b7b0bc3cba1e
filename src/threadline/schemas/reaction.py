"""Reaction-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field

ReactionState = Literal["NONE", "LIKED", "DISLIKED"]


class ReactionResponse(BaseModel):
    """Counters of a post after a toggle, plus the caller's resulting state."""

    post_id: int
    likes_count: int = Field(..., ge=0)
    dislikes_count: int = Field(..., ge=0)
    state: ReactionState


class MyReactionResponse(BaseModel):
    """The caller's current reaction on a post."""

    post_id: int
    state: ReactionState
