# api/pages/views.py
"""
Top-level navigation routes.

Each path asks the session gate where the caller belongs: a redirect when the
session state says so, otherwise a small descriptor of the view to render.
"""
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, RedirectResponse

from core.deps import Gate

router = APIRouter(tags=["pages"], include_in_schema=False)

VIEWS = {
    "/login": "login",
    "/dashboard": "dashboard",
    "/assets": "assets",
}


def _render(gate, path: str):
    target = gate.resolve_route(path)
    if target is not None:
        return RedirectResponse(url=target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    if gate.is_loading:
        return JSONResponse({"view": "loading"})
    return JSONResponse({"view": VIEWS[path], "status": gate.status.value})


@router.get("/")
async def root_page(gate: Gate):
    return _render(gate, "/")


@router.get("/login")
async def login_page(gate: Gate):
    return _render(gate, "/login")


@router.get("/dashboard")
async def dashboard_page(gate: Gate):
    return _render(gate, "/dashboard")


@router.get("/assets")
async def assets_page(gate: Gate):
    return _render(gate, "/assets")
