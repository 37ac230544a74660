"""HTTP routes for the location store."""

import pathlib
import secrets

import fastapi
import fastapi.responses
from fastapi import APIRouter, Depends, Header, HTTPException, Request
from sqlmodel import Session

import common.settings
import common.templates
from locator.app.capture import display
from locator.app.schemas import LocationPayload, LocationRecord, MessageResponse

from . import services
from .database import get_session

APP_DIR = pathlib.Path(__file__).resolve().parent.parent

SAVED_MESSAGE = 'Localização salva com sucesso!'
SAVE_FAILED_MESSAGE = 'Erro ao salvar a localização.'
LIST_FAILED_MESSAGE = 'Erro ao buscar as localizações.'
CLEARED_MESSAGE = 'Localizações limpas com sucesso!'
CLEAR_FAILED_MESSAGE = 'Erro ao limpar as localizações.'

router = APIRouter()
templates = common.templates.make_templates(
    APP_DIR / 'templates', describe_record=display.describe_record
)


def require_admin_token(
    x_admin_token: str | None = Header(default=None),
) -> None:
    """Reject the request unless it carries the configured admin token.

    With no ADMIN_TOKEN configured the server runs as a trusted
    single-operator deployment and every request passes.
    """
    expected = common.settings.ADMIN_TOKEN
    if expected is None:
        return
    if x_admin_token is None or not secrets.compare_digest(
        x_admin_token.encode(), expected.encode()
    ):
        raise HTTPException(status_code=401, detail='Invalid or missing admin token')


def _failure(message: str) -> fastapi.responses.JSONResponse:
    return fastapi.responses.JSONResponse(status_code=500, content={'message': message})


@router.post(
    '/save-location',
    response_model=MessageResponse,
    responses={500: {'model': MessageResponse}},
)
async def save_location(
    payload: LocationPayload, session: Session = Depends(get_session)
) -> MessageResponse | fastapi.responses.JSONResponse:
    """Store a captured location. Missing descriptive fields are accepted."""
    try:
        services.create_location(session, payload)
    except services.StorageError:
        return _failure(SAVE_FAILED_MESSAGE)
    return MessageResponse(message=SAVED_MESSAGE)


@router.get(
    '/locations',
    response_model=list[LocationRecord],
    responses={500: {'model': MessageResponse}},
    dependencies=[Depends(require_admin_token)],
)
async def get_locations(
    session: Session = Depends(get_session),
) -> list[LocationRecord] | fastapi.responses.JSONResponse:
    """List every stored location, most recent first."""
    try:
        rows = services.list_locations(session)
    except services.StorageError:
        return _failure(LIST_FAILED_MESSAGE)
    return [services.to_record(row) for row in rows]


@router.delete(
    '/locations',
    response_model=MessageResponse,
    responses={500: {'model': MessageResponse}},
    dependencies=[Depends(require_admin_token)],
)
async def delete_locations(
    session: Session = Depends(get_session),
) -> MessageResponse | fastapi.responses.JSONResponse:
    """Remove every stored location. Clearing an empty store succeeds."""
    try:
        services.clear_locations(session)
    except services.StorageError:
        return _failure(CLEAR_FAILED_MESSAGE)
    return MessageResponse(message=CLEARED_MESSAGE)


@router.get(
    '/history',
    response_class=fastapi.responses.HTMLResponse,
    dependencies=[Depends(require_admin_token)],
)
async def history_page(
    request: Request, session: Session = Depends(get_session)
) -> fastapi.responses.Response:
    """Admin page listing stored locations with placeholders for gaps."""
    try:
        rows = services.list_locations(session)
    except services.StorageError:
        return fastapi.responses.HTMLResponse(LIST_FAILED_MESSAGE, status_code=500)
    return templates.TemplateResponse(
        request=request,
        name='history.html.jinja2',
        context={
            'records': [services.to_record(row) for row in rows],
            'empty_message': display.EMPTY_HISTORY,
        },
    )
