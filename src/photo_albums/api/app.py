"""FastAPI application factory."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from photo_albums.api.admin import router as admin_router
from photo_albums.api.models import AlbumOut, AlbumViewOut, ErrorOut, PhotoOut
from photo_albums.app_logging import configure_logging
from photo_albums.containers import AppContainer
from photo_albums.domain.errors import (
    AssociationError,
    DecodeError,
    FetchError,
    InvalidUploadError,
    LinkingBusyError,
    PhotoAlbumError,
    PhotoServiceError,
    RevokedHandleError,
    SelectorClosedError,
    UnknownPhotoError,
)
from photo_albums.services.albums import ALL_PHOTOS, AlbumView

_ERROR_STATUS: dict[type[PhotoAlbumError], int] = {
    DecodeError: status.HTTP_502_BAD_GATEWAY,
    FetchError: status.HTTP_502_BAD_GATEWAY,
    AssociationError: status.HTTP_502_BAD_GATEWAY,
    PhotoServiceError: status.HTTP_502_BAD_GATEWAY,
    UnknownPhotoError: status.HTTP_400_BAD_REQUEST,
    InvalidUploadError: status.HTTP_400_BAD_REQUEST,
    LinkingBusyError: status.HTTP_409_CONFLICT,
    SelectorClosedError: status.HTTP_409_CONFLICT,
    RevokedHandleError: status.HTTP_404_NOT_FOUND,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to release photo resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(PhotoAlbumError)
    async def photo_album_error(
        request: Request, exc: PhotoAlbumError
    ) -> JSONResponse:
        status_code = _ERROR_STATUS.get(
            type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("%s: %s", type(exc).__name__, exc)
        body = ErrorOut(error=type(exc).__name__, message=str(exc))
        return JSONResponse(status_code=status_code, content=body.model_dump())

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/albums")
    async def list_albums(request: Request) -> list[AlbumOut]:
        """Reload and return the album list."""
        state_container: AppContainer = request.app.state.container
        albums = await state_container.album_browser.refresh_albums()
        associations = state_container.state.associations
        return [
            AlbumOut(
                id=album.id,
                name=album.name,
                owner_id=album.owner_id,
                photo_ids=sorted(associations[album.name])
                if album.name in associations
                else None,
            )
            for album in albums
        ]

    @app.post("/photos/open")
    async def open_all_photos(request: Request) -> AlbumViewOut:
        """Show every photo."""
        state_container: AppContainer = request.app.state.container
        view = await state_container.album_browser.open_album(None)
        return _view_out(view, ALL_PHOTOS)

    @app.post("/albums/{name}/open")
    async def open_album(name: str, request: Request) -> AlbumViewOut:
        """Show one album's photos."""
        state_container: AppContainer = request.app.state.container
        view = await state_container.album_browser.open_album(name)
        return _view_out(view, name)

    @app.post("/view/close")
    async def close_view(request: Request) -> dict[str, str]:
        """Go back to the album list."""
        state_container: AppContainer = request.app.state.container
        state_container.album_browser.close_view()
        return {"status": "closed"}

    @app.post("/view/zoom/{index}")
    async def zoom(index: int, request: Request) -> AlbumViewOut:
        """Zoom into one photo of the open view."""
        view = _current_view(request)
        try:
            view.zoom(index)
        except IndexError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return _view_out(view, view.name)

    @app.post("/view/next")
    async def next_photo(request: Request) -> AlbumViewOut:
        """Move the zoom forward."""
        view = _current_view(request)
        view.next_photo()
        return _view_out(view, view.name)

    @app.post("/view/previous")
    async def previous_photo(request: Request) -> AlbumViewOut:
        """Move the zoom backward."""
        view = _current_view(request)
        view.previous_photo()
        return _view_out(view, view.name)

    @app.get("/photos/{photo_id}/content")
    async def photo_content(photo_id: int, request: Request) -> Response:
        """Serve the bytes behind a displayed photo's live handle."""
        state_container: AppContainer = request.app.state.container
        registries = []
        view = state_container.album_browser.current_view
        if view is not None:
            registries.append(view.registry)
        if state_container.linking_workflow.registry is not None:
            registries.append(state_container.linking_workflow.registry)
        for registry in registries:
            if photo_id in registry:
                blob = await asyncio.to_thread(registry.read, photo_id)
                return Response(content=blob.content, media_type=blob.content_type)
        raise RevokedHandleError(f"photo:{photo_id}")

    return app


def _current_view(request: Request) -> AlbumView:
    state_container: AppContainer = request.app.state.container
    view = state_container.album_browser.current_view
    if view is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No album is open"
        )
    return view


def _view_out(view: AlbumView | None, name: str) -> AlbumViewOut:
    if view is None:
        return AlbumViewOut(album=name, photos=[])
    zoomed = view.zoomed_handle()
    return AlbumViewOut(
        album=view.name,
        photos=[PhotoOut.from_handle(handle) for handle in view.handles()],
        zoomed=PhotoOut.from_handle(zoomed) if zoomed else None,
    )
