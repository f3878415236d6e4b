"""
Generic CRUD routes for the whitelisted tables:

    GET    /{table}              list (newest first)
    POST   /{table}              create
    PUT    /{table}/{record_id}  update
    DELETE /{table}/{record_id}  delete

Routes stay thin: the dispatcher resolves the table, validates, runs the
statement and builds the envelope; failures are rendered by the exception
handlers.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from vetclinic.core.dependencies import get_crud_dispatcher
from vetclinic.schemas.envelope import Envelope
from vetclinic.services.crud_dispatcher import CrudDispatcher

router = APIRouter()


@router.get("/{table}", response_model=Envelope)
async def list_records(table: str, dispatcher: CrudDispatcher = Depends(get_crud_dispatcher)):
    return await dispatcher.list(table)


@router.post("/{table}", response_model=Envelope)
async def create_record(
    table: str,
    payload: dict[str, Any] = Body(...),
    dispatcher: CrudDispatcher = Depends(get_crud_dispatcher),
):
    return await dispatcher.create(table, payload)


@router.put("/{table}/{record_id}", response_model=Envelope)
async def update_record(
    table: str,
    record_id: str,
    payload: dict[str, Any] = Body(...),
    dispatcher: CrudDispatcher = Depends(get_crud_dispatcher),
):
    return await dispatcher.update(table, record_id, payload)


@router.delete("/{table}/{record_id}", response_model=Envelope)
async def delete_record(
    table: str,
    record_id: str,
    dispatcher: CrudDispatcher = Depends(get_crud_dispatcher),
):
    return await dispatcher.delete(table, record_id)
