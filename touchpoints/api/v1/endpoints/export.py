"""
CSV export API
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from touchpoints.core.errors import NotFoundError, ValidationError
from touchpoints.core.security import AuthContext
from touchpoints.repositories.events import EventStore
from touchpoints.services.export import WORKFLOWS, export_filename, to_csv
from ..deps import get_current_user, get_store

router = APIRouter()


@router.get("/{workflow}")
def export_workflow(
    workflow: str,
    store: EventStore = Depends(get_store),
    user: AuthContext = Depends(get_current_user),
):
    """Download every record of one workflow as CSV, newest first"""
    kind = WORKFLOWS.get(workflow)
    if kind is None:
        raise ValidationError([f"Invalid workflow: {workflow}"], message="Invalid workflow")

    rows = store.repository(kind).find()
    if not rows:
        raise NotFoundError("Data to export")

    filename = export_filename(workflow, datetime.now(timezone.utc))
    return Response(
        content=to_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
