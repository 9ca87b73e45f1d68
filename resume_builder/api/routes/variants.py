from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from resume_builder.api.dependencies import get_variant_store
from resume_builder.core.errors import (
    InvalidVariantNameError,
    LastVariantError,
    VariantExistsError,
    VariantNotFoundError,
)
from resume_builder.core.latex_renderer import render_latex
from resume_builder.core.schemas import ResumeRecord, VariantCreateRequest, VariantExport, VariantList
from resume_builder.core.variant_store import VariantStore

router = APIRouter(prefix="/variants", tags=["variants"])


def _get_or_404(store: VariantStore, name: str) -> ResumeRecord:
    try:
        return store.get(name)
    except VariantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _listing(store: VariantStore) -> VariantList:
    return VariantList(variants=store.names(), current=store.current or "")


@router.get("", response_model=VariantList, summary="List variants")
def list_variants(store: VariantStore = Depends(get_variant_store)):
    return _listing(store)


@router.post("", response_model=VariantList, status_code=201, summary="Create an empty variant")
def create_variant(body: VariantCreateRequest, store: VariantStore = Depends(get_variant_store)):
    try:
        store.create(body.name)
    except InvalidVariantNameError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except VariantExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _listing(store)


@router.post("/import", response_model=VariantList, summary="Import a variant from a JSON export")
def import_variant(payload: Dict[str, Any] = Body(...), store: VariantStore = Depends(get_variant_store)):
    try:
        store.import_json(payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid variant export: {e.error_count()} error(s)")
    except InvalidVariantNameError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _listing(store)


@router.get("/{name}", response_model=ResumeRecord, summary="Get a variant's record")
def get_variant(name: str, store: VariantStore = Depends(get_variant_store)):
    return _get_or_404(store, name)


@router.put("/{name}", response_model=ResumeRecord, summary="Replace a variant's record")
def update_variant(name: str, record: ResumeRecord, store: VariantStore = Depends(get_variant_store)):
    try:
        store.update(name, record)
    except VariantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return store.get(name)


@router.delete("/{name}", response_model=VariantList, summary="Delete a variant")
def delete_variant(name: str, store: VariantStore = Depends(get_variant_store)):
    try:
        store.delete(name)
    except VariantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except LastVariantError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _listing(store)


@router.post("/{name}/select", response_model=VariantList, summary="Make a variant current")
def select_variant(name: str, store: VariantStore = Depends(get_variant_store)):
    try:
        store.set_current(name)
    except VariantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _listing(store)


@router.get("/{name}/export", response_model=VariantExport, summary="Export a variant as JSON")
def export_variant(name: str, store: VariantStore = Depends(get_variant_store)):
    try:
        return store.export_json(name)
    except VariantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{name}/latex", response_class=PlainTextResponse, summary="Render a variant as LaTeX")
def export_latex(name: str, store: VariantStore = Depends(get_variant_store)):
    record = _get_or_404(store, name)
    filename = name if name.endswith(".tex") else f"{name}.tex"
    return PlainTextResponse(
        render_latex(record),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
