"""API routes for MergeSmith."""

from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from ..merge import MergeEngine, ValidationError, export_documents
from ..registry import NotFoundError, PlaceholderRegistry
from ..sessions import MergeSession, SessionNotFoundError, SessionStore

router = APIRouter()

# Global instances
_session_store: Optional[SessionStore] = None
_merge_engine: Optional[MergeEngine] = None


def get_session_store() -> SessionStore:
    """Get the global session store."""
    global _session_store
    if _session_store is None:
        from ..config import settings

        _session_store = SessionStore(
            ttl_minutes=settings.session_ttl_minutes,
            max_sessions=settings.max_sessions,
        )
    return _session_store


def get_merge_engine() -> MergeEngine:
    """Get the global merge engine."""
    global _merge_engine
    if _merge_engine is None:
        _merge_engine = MergeEngine.from_settings()
    return _merge_engine


class SessionCreateRequest(BaseModel):
    """Request to open a session."""

    template: str = ""


class TemplateUpdateRequest(BaseModel):
    """Request to replace a session's template."""

    template: str


class PlaceholderRenameRequest(BaseModel):
    """Request to rename a placeholder."""

    name: str


class ValueUpdateRequest(BaseModel):
    """Request to edit a value's text."""

    text: str


class PlaceholderInput(BaseModel):
    """A placeholder given inline with its values."""

    name: str
    values: list[str] = Field(default_factory=list)


class MergeRequest(BaseModel):
    """Stateless merge of a template with inline placeholders."""

    template: str
    placeholders: list[PlaceholderInput] = Field(default_factory=list)


async def _load_session(session_id: str) -> MergeSession:
    try:
        return await get_session_store().get_async(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _session_state(session: MergeSession) -> dict:
    readiness = get_merge_engine().readiness(session.template, session.registry)
    return {
        "session_id": session.session_id,
        "template": session.template,
        "placeholders": [p.model_dump() for p in session.registry],
        "count": readiness.count,
        "ready": readiness.ready,
        "hint": readiness.hint,
        "expires_at": session.expires_at.isoformat(),
    }


# Health check


@router.get("/health")
async def health_check():
    """Health check endpoint with non-secret configuration."""
    from ..config import settings

    return {
        "status": "ok",
        "service": "mergesmith",
        "config": {
            "escape_placeholder_names": settings.escape_placeholder_names,
            "document_name_prefix": settings.document_name_prefix,
            "session_ttl_minutes": settings.session_ttl_minutes,
        },
        "active_sessions": get_session_store().size(),
    }


# Session endpoints


@router.post("/sessions")
async def create_session(request: SessionCreateRequest):
    """Open an editing session with an empty registry."""
    session = await get_session_store().create_async(template=request.template)
    return _session_state(session)


@router.get("/sessions/{session_id}")
async def get_session(session_id: str):
    """Get a session's template, placeholders and document count."""
    session = await _load_session(session_id)
    return _session_state(session)


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    """Close a session and drop its registry."""
    removed = await get_session_store().remove_async(session_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Session not found")
    return {"status": "ok", "message": "Session closed"}


@router.put("/sessions/{session_id}/template")
async def update_template(session_id: str, request: TemplateUpdateRequest):
    """Replace the session's template text."""
    session = await _load_session(session_id)
    session.template = request.template
    return _session_state(session)


# Placeholder endpoints


@router.post("/sessions/{session_id}/placeholders")
async def add_placeholder(session_id: str):
    """Add an unnamed placeholder with no values."""
    session = await _load_session(session_id)
    placeholder = session.registry.add_placeholder()
    return placeholder.model_dump()


@router.patch("/sessions/{session_id}/placeholders/{placeholder_id}")
async def rename_placeholder(session_id: str, placeholder_id: str, request: PlaceholderRenameRequest):
    """Rename a placeholder."""
    session = await _load_session(session_id)
    try:
        placeholder = session.registry.rename_placeholder(placeholder_id, request.name)
        return placeholder.model_dump()
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/sessions/{session_id}/placeholders/{placeholder_id}")
async def remove_placeholder(session_id: str, placeholder_id: str):
    """Remove a placeholder and its values."""
    session = await _load_session(session_id)
    try:
        session.registry.remove_placeholder(placeholder_id)
        return {"status": "ok", "message": "Placeholder removed"}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# Value endpoints


@router.post("/sessions/{session_id}/placeholders/{placeholder_id}/values")
async def add_value(session_id: str, placeholder_id: str):
    """Append an empty value to a placeholder."""
    session = await _load_session(session_id)
    try:
        value = session.registry.add_value(placeholder_id)
        return value.model_dump()
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/sessions/{session_id}/placeholders/{placeholder_id}/values/{value_id}")
async def update_value(session_id: str, placeholder_id: str, value_id: str, request: ValueUpdateRequest):
    """Edit a value's text."""
    session = await _load_session(session_id)
    try:
        value = session.registry.update_value(placeholder_id, value_id, request.text)
        return value.model_dump()
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/sessions/{session_id}/placeholders/{placeholder_id}/values/{value_id}")
async def remove_value(session_id: str, placeholder_id: str, value_id: str):
    """Remove a value; later values move up one row."""
    session = await _load_session(session_id)
    try:
        session.registry.remove_value(placeholder_id, value_id)
        return {"status": "ok", "message": "Value removed"}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# Merge endpoints


@router.get("/sessions/{session_id}/count")
async def preview_count(session_id: str):
    """
    Report how many documents generate would produce.

    Returns:
    - count of documents
    - whether generation can run, with a hint if not
    """
    session = await _load_session(session_id)
    readiness = get_merge_engine().readiness(session.template, session.registry)
    return readiness.model_dump()


@router.post("/sessions/{session_id}/generate")
async def generate_documents(session_id: str):
    """Generate one document per row from the session's template and fields."""
    session = await _load_session(session_id)
    try:
        result = get_merge_engine().merge(session.template, session.registry)
        return result.model_dump()
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/sessions/{session_id}/export")
async def export_session(session_id: str):
    """Download all generated documents as one text file."""
    from ..config import settings

    session = await _load_session(session_id)
    try:
        documents = get_merge_engine().generate(session.template, session.registry)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return PlainTextResponse(
        export_documents(documents),
        headers={"Content-Disposition": f'attachment; filename="{settings.export_filename}"'},
    )


@router.post("/merge")
async def merge(request: MergeRequest):
    """Merge a template with inline placeholders without opening a session."""
    registry = PlaceholderRegistry.from_mapping(
        [(p.name, p.values) for p in request.placeholders]
    )
    try:
        result = get_merge_engine().merge(request.template, registry)
        return result.model_dump()
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
