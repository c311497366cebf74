import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status

from threadline.api import deps
from threadline.api.errors import error_response, success_response
from threadline.core.validation import parse_page
from threadline.schemas.thread import ThreadCreate, ThreadUpdate
from threadline.services.thread import ThreadService

router = APIRouter(prefix="/threads", tags=["threads"])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a thread")
async def add_thread_route(
    request: Request,
    payload: ThreadCreate,
    auth_user_id: uuid.UUID = Depends(deps.get_auth_user_id),
    service: ThreadService = Depends(deps.get_thread_service),
):
    result = await service.add(
        auth_user_id,
        content=payload.content,
        image=payload.image,
        upload_id=payload.upload_id,
    )
    if not result.ok:
        return error_response(result.error)
    # Envelope carries no data; the new id travels in the Location header.
    location = str(request.url_for("find_one_thread_route", thread_id=str(result.value)).path)
    return success_response(
        status.HTTP_201_CREATED, "Add Thread Success", headers={"Location": location}
    )


@router.get("", summary="List threads",
            description="Ten threads per page, newest first; replies are reported as a count.")
async def find_all_threads_route(
    page: Optional[str] = Query(None, description="1-based page number; values below 1 read as 1"),
    service: ThreadService = Depends(deps.get_thread_service),
):
    result = await service.find_all(parse_page(page))
    return success_response(status.HTTP_200_OK, "Find All Thread Success", result.value)


@router.get("/{thread_id}", summary="Get a thread")
async def find_one_thread_route(
    thread_id: str,
    service: ThreadService = Depends(deps.get_thread_service),
):
    result = await service.find_one(thread_id)
    if not result.ok:
        return error_response(result.error)
    return success_response(status.HTTP_200_OK, "Find One Thread Success", result.value)


@router.api_route("/{thread_id}", methods=["PATCH", "PUT"], summary="Update a thread's content")
async def update_thread_route(
    thread_id: str,
    payload: ThreadUpdate,
    auth_user_id: uuid.UUID = Depends(deps.get_auth_user_id),
    service: ThreadService = Depends(deps.get_thread_service),
):
    result = await service.update_one(thread_id, content=payload.content)
    if not result.ok:
        return error_response(result.error)
    return success_response(status.HTTP_200_OK, "Update One Thread Success")


@router.delete("/{thread_id}", summary="Delete a thread")
async def delete_thread_route(
    thread_id: str,
    auth_user_id: uuid.UUID = Depends(deps.get_auth_user_id),
    service: ThreadService = Depends(deps.get_thread_service),
):
    result = await service.delete_one(thread_id)
    if not result.ok:
        return error_response(result.error)
    return success_response(status.HTTP_200_OK, "Delete One Thread Success")
