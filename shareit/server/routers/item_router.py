from fastapi import APIRouter, Depends
from typing import Annotated

from .. import schemas
from ..comment_service import CommentService
from ..dependencies import get_comment_service, get_current_user_id

router = APIRouter(prefix="/items", tags=["Items"])


@router.post("/{item_id}/comment", response_model=schemas.CommentRead)
def add_comment(
        item_id: int,
        comment: schemas.CommentCreate,
        user_id: Annotated[int, Depends(get_current_user_id)],
        service: Annotated[CommentService, Depends(get_comment_service)],
):
    """
    Leave a comment on an item the user has finished renting.
    """
    return service.add_comment(user_id, item_id, comment.text)
