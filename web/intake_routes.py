"""
Intake Form Routes - Web Surface for the Multi-Step Form

Server-rendered rendition of the intake form. Each browser session owns one
IntakeFormController; the routes only translate HTTP requests into
controller transitions and render the resulting state.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from core.intake import IntakeFormController
from web.adapter import build_form_context, build_status, read_step_values
from web.sessions import SESSION_COOKIE, IntakeSessionRegistry


logger = logging.getLogger(__name__)


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter(prefix="/intake", tags=["intake"])
TEMPLATES_DIR = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _sessions(request: Request) -> IntakeSessionRegistry:
    return request.app.state.sessions


def _session(request: Request) -> tuple[str, IntakeFormController]:
    """Return the caller's session, starting one if needed. Only the form page does this."""
    return _sessions(request).get_or_create(request.cookies.get(SESSION_COOKIE))


def _existing_session(request: Request) -> Optional[tuple[str, IntakeFormController]]:
    session_id = request.cookies.get(SESSION_COOKIE)
    controller = _sessions(request).get(session_id)
    if controller is None:
        return None
    return session_id, controller


def _with_cookie(response: Response, session_id: str) -> Response:
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


def _redirect_to_form(session_id: Optional[str] = None) -> Response:
    response = RedirectResponse(url="/intake/", status_code=303)
    if session_id is None:
        return response
    return _with_cookie(response, session_id)


def _no_session() -> HTTPException:
    return HTTPException(status_code=404, detail="No intake session; load /intake/ first")


# =============================================================================
# Form
# =============================================================================


@router.get("/", response_class=HTMLResponse)
async def intake_form(request: Request):
    """Render the current step, or the thank-you page once submitted."""
    session_id, controller = _session(request)

    if controller.submitted:
        response = templates.TemplateResponse(
            request,
            "intake_success.html",
            {"message": controller.success_message or ""},
        )
        return _with_cookie(response, session_id)

    response = templates.TemplateResponse(
        request,
        "intake_form.html",
        build_form_context(controller),
    )
    return _with_cookie(response, session_id)


@router.post("/next")
async def next_step(request: Request):
    """Collect the posted step and advance, submitting from the last step."""
    session = _existing_session(request)
    if session is None:
        return _redirect_to_form()
    session_id, controller = session
    posted = await request.form()

    values = read_step_values(controller.current_step, posted)
    await controller.advance(values)

    return _redirect_to_form(session_id)


@router.post("/back")
async def previous_step(request: Request):
    """Go back one step. Values posted with Back are kept but not validated."""
    session = _existing_session(request)
    if session is None:
        return _redirect_to_form()
    session_id, controller = session
    posted = await request.form()

    if not controller.is_submitting and not controller.submitted:
        controller.collect(read_step_values(controller.current_step, posted))
    controller.retreat()

    return _redirect_to_form(session_id)


@router.post("/field")
async def change_field(request: Request):
    """
    Record one field change and return the conditional-field visibility.

    Called by the page script whenever a field that drives a conditional
    field changes. Only fields on the current step can be changed.
    """
    session = _existing_session(request)
    if session is None:
        raise _no_session()
    session_id, controller = session
    posted = await request.form()

    name = posted.get("name")
    if not name or controller.submitted:
        raise HTTPException(status_code=400, detail="Field cannot be changed")
    try:
        visibility = controller.update_field(str(name), posted.get("value"))
    except ValueError as e:
        logger.warning("Rejected field change: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return _with_cookie(JSONResponse({"visibility": visibility}), session_id)


@router.post("/reset")
async def reset_form(request: Request):
    """
    Throw away the collected values and start at step 1.

    A session that already submitted is ended; the form page then starts a
    fresh one.
    """
    session = _existing_session(request)
    if session is None:
        return _redirect_to_form()
    session_id, controller = session

    was_submitted = controller.submitted
    if not controller.reset():
        return _redirect_to_form(session_id)
    if was_submitted:
        _sessions(request).discard(session_id)
        response = _redirect_to_form()
        response.delete_cookie(SESSION_COOKIE)
        return response
    return _redirect_to_form(session_id)


@router.get("/status")
async def form_status(request: Request):
    """Current controller state as JSON."""
    session = _existing_session(request)
    if session is None:
        raise _no_session()
    session_id, controller = session
    return _with_cookie(JSONResponse(build_status(controller)), session_id)
