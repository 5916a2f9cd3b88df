"""FastAPI routes for the widget page and the JSON API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Query, Request, Response, status
from fastapi.responses import HTMLResponse, RedirectResponse

from ..widget import SnippetSession
from .model import SnippetCreateRequest, SnippetCreateResponse, SnippetListResponse, StatusResponse
from .page import render_page
from .service import (
    create_snippet_service,
    delete_snippet_service,
    list_snippets_service,
    status_service,
)
from .state import WidgetState


def get_session(request: Request) -> SnippetSession:
    session = getattr(request.app.state, "session", None)
    if not isinstance(session, SnippetSession):
        raise RuntimeError("Snippet session has not been initialised")
    return session


def get_widget_state(request: Request) -> WidgetState:
    widget = getattr(request.app.state, "widget", None)
    if not isinstance(widget, WidgetState):
        raise RuntimeError("Widget state has not been initialised")
    return widget


def _back_to_page() -> RedirectResponse:
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def show_widget(
    session: SnippetSession = Depends(get_session),
    state: WidgetState = Depends(get_widget_state),
) -> HTMLResponse:
    # Every page load reconnects if needed and reloads the list.
    if session.connected:
        await session.refresh()
    else:
        await session.probe()
    page = render_page(state)
    state.focused = None
    return HTMLResponse(page)


@router.post("/snippets", response_class=RedirectResponse)
async def submit_snippet(
    date: str = Form(""),
    code: str = Form(""),
    session: SnippetSession = Depends(get_session),
    state: WidgetState = Depends(get_widget_state),
) -> RedirectResponse:
    # A disabled save button cannot be pressed twice.
    if not state.saving:
        state.remember_inputs(date, code)
        await session.create(date, code)
    return _back_to_page()


@router.post("/snippets/{snippet_id}/delete", response_class=RedirectResponse)
async def remove_snippet(
    snippet_id: str,
    confirmed: bool = Form(False),
    session: SnippetSession = Depends(get_session),
) -> RedirectResponse:
    await session.delete(snippet_id, confirmed=confirmed)
    return _back_to_page()


@router.post("/clear", response_class=RedirectResponse)
async def clear_fields(
    date: str = Form(""),
    code: str = Form(""),
    session: SnippetSession = Depends(get_session),
    state: WidgetState = Depends(get_widget_state),
) -> RedirectResponse:
    state.remember_inputs(date, code)
    session.clear()
    return _back_to_page()


@router.get("/api/snippets", response_model=SnippetListResponse)
async def list_snippets(session: SnippetSession = Depends(get_session)) -> SnippetListResponse:
    return await list_snippets_service(session)


@router.post(
    "/api/snippets",
    response_model=SnippetCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_snippet(
    payload: SnippetCreateRequest,
    session: SnippetSession = Depends(get_session),
    state: WidgetState = Depends(get_widget_state),
) -> SnippetCreateResponse:
    return await create_snippet_service(payload, session, state)


@router.delete("/api/snippets/{snippet_id}", response_class=Response)
async def delete_snippet(
    snippet_id: str,
    confirm: bool = Query(False, description="Must be true to delete"),
    session: SnippetSession = Depends(get_session),
) -> Response:
    await delete_snippet_service(snippet_id, confirm, session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/api/status", response_model=StatusResponse)
async def store_status(
    session: SnippetSession = Depends(get_session),
    state: WidgetState = Depends(get_widget_state),
) -> StatusResponse:
    return status_service(session, state)


__all__ = ["router", "get_session", "get_widget_state"]
