from fastapi import APIRouter
from fastapi.responses import HTMLResponse, PlainTextResponse
from playground.schemas.run import PreviewIn
from playground.services.preview import bundle_for_commit, compose_document

router = APIRouter(prefix="/preview", tags=["preview"])


@router.post("", response_class=HTMLResponse)
async def render_preview(payload: PreviewIn):
    return compose_document(payload.html, payload.css, payload.js)


@router.post("/bundle", response_class=PlainTextResponse)
async def preview_bundle(payload: PreviewIn):
    return bundle_for_commit(payload.html, payload.css, payload.js)
