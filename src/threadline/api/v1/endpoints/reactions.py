# src/threadline/api/v1/endpoints/reactions.py
"""Like/dislike endpoints for the Threadline API."""

from fastapi import APIRouter, Response, status

from threadline.schemas.reaction import MyReactionResponse, ReactionResponse
from threadline.services.reactions import ReactionCounts

from ..dependencies import ContentGraphDep, CurrentUserDep, ReactionLedgerDep

router = APIRouter(prefix="/posts", tags=["reactions"])


def _respond(counts: ReactionCounts, response: Response) -> ReactionResponse:
    # 201 when an edge now exists, 200 when the toggle removed it.
    response.status_code = (
        status.HTTP_200_OK if counts.state == "NONE" else status.HTTP_201_CREATED
    )
    return ReactionResponse(
        post_id=counts.post_id,
        likes_count=counts.likes_count,
        dislikes_count=counts.dislikes_count,
        state=counts.state,
    )


@router.post("/{post_id}/toggle-like", response_model=ReactionResponse)
def toggle_like(
    post_id: int,
    response: Response,
    current_user: CurrentUserDep,
    ledger: ReactionLedgerDep,
) -> ReactionResponse:
    """Like a post, remove an existing like, or switch a dislike to a like."""
    return _respond(ledger.toggle_like(current_user.id, post_id), response)


@router.post("/{post_id}/toggle-dislike", response_model=ReactionResponse)
def toggle_dislike(
    post_id: int,
    response: Response,
    current_user: CurrentUserDep,
    ledger: ReactionLedgerDep,
) -> ReactionResponse:
    """Dislike a post, remove an existing dislike, or switch a like to a dislike."""
    return _respond(ledger.toggle_dislike(current_user.id, post_id), response)


@router.get("/{post_id}/my-reaction", response_model=MyReactionResponse)
def get_my_reaction(
    post_id: int,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    ledger: ReactionLedgerDep,
) -> MyReactionResponse:
    """Get the current user's reaction on a post."""
    graph.get_interactable(post_id)
    return MyReactionResponse(post_id=post_id, state=ledger.get_state(current_user.id, post_id))
