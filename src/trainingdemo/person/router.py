from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.orm import Session

from trainingdemo.person.services import PersonListService

person_list_router = APIRouter(prefix="/person-list", tags=["Person List"])


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@person_list_router.get("/older-than/{years}")
def list_older_than(
    request: Request,
    years: int = Path(..., ge=0, le=200),
    db: Session = Depends(get_db),
) -> List[Dict[str, Any]]:
    """
    Content items whose person is older than `years`, rendered as Summary shapes.
    """
    shell = request.app.state.shell
    items = PersonListService(shell.store(db)).older_than(years)
    manager = shell.display_manager()
    return [
        {
            "id": item.id,
            "content_type": item.content_type,
            "display_text": item.display_text,
            "zones": manager.build_display(item, "Summary"),
        }
        for item in items
    ]


@person_list_router.get("")
def list_default(request: Request, db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    """Person list using the configured age threshold."""
    return list_older_than(request, request.app.state.settings.PERSON_LIST_MIN_AGE, db)
