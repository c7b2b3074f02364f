"""Admin API endpoints for linking photos to albums and managing photos."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from photo_albums.api.models import LinkingOut, LinkOutcomeOut, PhotoOut
from photo_albums.domain.errors import ReconciliationError
from photo_albums.domain.photos import PhotoUpload

if TYPE_CHECKING:
    from photo_albums.containers import AppContainer
    from photo_albums.services.linking import LinkingWorkflow

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/link", dependencies=[Depends(require_admin)])
async def linking_state(request: Request) -> LinkingOut:
    """Return the linking session state."""
    container: AppContainer = request.app.state.container
    return _linking_out(container.linking_workflow)


@router.post("/albums/{album_id}/link/open", dependencies=[Depends(require_admin)])
async def open_selector(album_id: int, request: Request) -> LinkingOut:
    """Open the photo selector for an album."""
    container: AppContainer = request.app.state.container
    album = container.state.album_by_id(album_id)
    if album is None:
        await container.album_browser.refresh_albums()
        album = container.state.album_by_id(album_id)
    if album is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Album not found"
        )
    await container.linking_workflow.open_selector(album)
    return _linking_out(container.linking_workflow)


@router.post("/link/toggle/{photo_id}", dependencies=[Depends(require_admin)])
async def toggle_photo(
    photo_id: int, request: Request, selected: bool | None = None
) -> LinkingOut:
    """Select or deselect a candidate photo."""
    container: AppContainer = request.app.state.container
    container.linking_workflow.toggle(photo_id, selected)
    return _linking_out(container.linking_workflow)


@router.post("/link/submit", dependencies=[Depends(require_admin)])
async def submit_link(request: Request) -> LinkOutcomeOut:
    """Link the selected photos to the selector's album."""
    container: AppContainer = request.app.state.container
    try:
        result = await container.linking_workflow.submit()
    except ReconciliationError as exc:
        return LinkOutcomeOut(
            status="linked", stale=True, message=str(exc), album=exc.album_name
        )
    if result is None:
        return LinkOutcomeOut(status="ignored", message="Nothing to submit")
    return LinkOutcomeOut(
        status="linked",
        message=result.confirmation,
        album=result.album.name,
        photo_ids=sorted(result.association),
    )


@router.post("/link/cancel", dependencies=[Depends(require_admin)])
async def cancel_link(request: Request) -> LinkingOut:
    """Close the selector without linking."""
    container: AppContainer = request.app.state.container
    if not container.linking_workflow.cancel():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Submission in progress"
        )
    return _linking_out(container.linking_workflow)


@router.post("/photos/upload", dependencies=[Depends(require_admin)])
async def upload_photo(
    request: Request,
    x_filename: str = Header(default="upload"),
    content_type: str = Header(default="application/octet-stream"),
) -> dict[str, str]:
    """Upload one image sent as the raw request body."""
    container: AppContainer = request.app.state.container
    upload = PhotoUpload(
        filename=x_filename,
        content=await request.body(),
        content_type=content_type,
    )
    responses = await container.photo_library.upload_photos([upload])
    return {"status": "uploaded", "message": responses[0]}


@router.delete("/photos/{photo_id}", dependencies=[Depends(require_admin)])
async def delete_photo(photo_id: int, request: Request) -> dict[str, str]:
    """Delete a photo and drop it from every open view."""
    container: AppContainer = request.app.state.container
    message = await container.photo_library.delete_photo(photo_id)
    container.album_browser.remove_photo(photo_id)
    container.linking_workflow.remove_candidate(photo_id)
    return {"status": "deleted", "message": message}


def _linking_out(workflow: LinkingWorkflow) -> LinkingOut:
    selection = workflow.selection
    return LinkingOut(
        status=workflow.status.value,
        album=workflow.target_album.name if workflow.target_album else None,
        candidates=[PhotoOut.from_handle(handle) for handle in workflow.candidates()],
        selected=selection.selected() if selection is not None else [],
    )
