from typing import Any, Callable

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from ..errors import InvalidCommandValueError, SelectionError, UnknownCommandError
from ..events import ClickEvent, EventDispatcher, KeyEvent, TransferEvent
from ..render import render_html
from ..selection import Range
from ..session import EditorSession


class EditorState(BaseModel):
    handled: bool = True
    version: int
    generation: int
    selection: Range
    toolbar: dict[str, bool]
    document: dict[str, Any]


def _state(session: EditorSession, handled: bool = True) -> EditorState:
    return EditorState(
        handled=handled,
        version=session.version,
        generation=session.generation,
        selection=session.selection,
        toolbar=session.toolbar_state(),
        document=session.document.model_dump(),
    )


def create_editor_router(get_session: Callable[..., EditorSession]):
    """
    Routes for driving an editor session over HTTP. `get_session` is a
    FastAPI dependency returning the session a request acts on.
    """
    router = APIRouter(prefix="/editor", tags=["editor"])

    @router.get("/document")
    async def get_document(session: EditorSession = Depends(get_session)):
        return session.document.model_dump()

    @router.get("/html", response_class=HTMLResponse)
    async def get_html(session: EditorSession = Depends(get_session)):
        return render_html(session.document)

    @router.get("/state", response_model=EditorState)
    async def get_state(session: EditorSession = Depends(get_session)):
        return _state(session)

    @router.post("/select", response_model=EditorState)
    async def select(selection: Range, session: EditorSession = Depends(get_session)):
        try:
            session.select(selection)
        except SelectionError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(session)

    @router.post("/keydown", response_model=EditorState)
    async def key_down(event: KeyEvent, session: EditorSession = Depends(get_session)):
        handled = EventDispatcher(session).on_key_down(event)
        return _state(session, handled)

    @router.post("/click", response_model=EditorState)
    async def click(event: ClickEvent, session: EditorSession = Depends(get_session)):
        try:
            handled = EventDispatcher(session).on_click(event)
        except (UnknownCommandError, InvalidCommandValueError) as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(session, handled)

    @router.post("/transfer", response_model=EditorState)
    async def transfer(event: TransferEvent, session: EditorSession = Depends(get_session)):
        dispatcher = EventDispatcher(session)
        handled = await dispatcher.on_drop_or_paste(event)
        await dispatcher.drain()
        return _state(session, handled)

    @router.post("/save")
    async def save(session: EditorSession = Depends(get_session)):
        payload = session.save()
        return {"key": session.gateway.key, "size": len(payload)}

    @router.post("/reset", response_model=EditorState)
    async def reset(session: EditorSession = Depends(get_session)):
        session.reset()
        return _state(session)

    return router
