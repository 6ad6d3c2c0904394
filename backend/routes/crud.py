# backend/routes/crud.py
from typing import Callable, List, Optional, Type

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, create_model
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import Base, get_db
from services.errors import ConflictError, InvalidDataError


def build_crud_router(
    *,
    model: Type[Base],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    out_schema: Type[BaseModel],
    prefix: str,
    singular: str,
    plural: str,
    label: str,
    tags: List[str],
    before_delete: Optional[Callable[[Session, Base], None]] = None,
) -> APIRouter:
    """
    Plain list/get/create/update/delete endpoints over a single table.

    Responses use the ``{<singular>: ..., "status": "success"}`` envelope,
    e.g. ``{"buyer": {...}}`` or ``{"pickupPoints": [...]}``.

    ``before_delete(db, obj)`` runs in the same transaction as the delete,
    so dependent rows can be removed along with the entity.
    """
    router = APIRouter(prefix=prefix, tags=tags)

    Envelope = create_model(f"{out_schema.__name__}Envelope", **{singular: (out_schema, ...), "status": (str, "success")})
    Listing = create_model(f"{out_schema.__name__}List", **{plural: (List[out_schema], ...), "status": (str, "success")})

    def _get_or_404(db: Session, entity_id: int):
        obj = db.get(model, entity_id)
        if not obj:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return obj

    def _wrap(obj):
        return {singular: out_schema.model_validate(obj), "status": "success"}

    @router.get("", response_model=Listing, name=f"list_{plural}")
    def list_entities(db: Session = Depends(get_db)):
        rows = db.query(model).order_by(model.id).all()
        return {plural: [out_schema.model_validate(r) for r in rows], "status": "success"}

    @router.get("/{entity_id}", response_model=Envelope, name=f"get_{singular}")
    def get_entity(entity_id: int, db: Session = Depends(get_db)):
        return _wrap(_get_or_404(db, entity_id))

    @router.post("", response_model=Envelope, status_code=201, name=f"create_{singular}")
    def create_entity(payload: create_schema, db: Session = Depends(get_db)):
        obj = model(**payload.model_dump())
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return _wrap(obj)

    @router.put("/{entity_id}", response_model=Envelope, name=f"update_{singular}")
    def update_entity(entity_id: int, payload: update_schema, db: Session = Depends(get_db)):
        obj = _get_or_404(db, entity_id)

        # Update fields if provided in the payload; required fields cannot be cleared
        changes = payload.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and create_schema.model_fields[field].is_required():
                raise InvalidDataError(f"Field '{field}' cannot be empty")
            setattr(obj, field, value)

        db.commit()
        db.refresh(obj)
        return _wrap(obj)

    @router.delete("/{entity_id}", name=f"delete_{singular}")
    def delete_entity(entity_id: int, db: Session = Depends(get_db)):
        obj = _get_or_404(db, entity_id)
        if before_delete is not None:
            before_delete(db, obj)
        db.delete(obj)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise ConflictError(f"{label} is still referenced by other records") from exc
        return {"message": f"{label} deleted successfully", "status": "success"}

    return router
