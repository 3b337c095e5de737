import logging
from fastapi import APIRouter, Depends, Header, Path, Request
from typing import Annotated

from ..client import USER_ID_HEADER, ItemClient
from ..schemas import CommentRequest
from ..validators import validate_comment

router = APIRouter(prefix="/items", tags=["Items"])

logger = logging.getLogger("shareit_gateway")


def get_item_client(request: Request) -> ItemClient:
    return ItemClient(request.app.state.http_client)


@router.post("/{item_id}/comment")
async def add_comment(
    comment: CommentRequest,
    item_id: Annotated[int, Path(gt=0)],
    user_id: Annotated[int, Header(alias=USER_ID_HEADER, gt=0)],
    client: Annotated[ItemClient, Depends(get_item_client)],
):
    logger.info(f"Gateway: user {user_id} comments on item {item_id}")
    validate_comment(comment.text)
    return await client.add_comment(user_id, item_id, comment)
