# app/routers/_confirm.py
"""Operator confirmation gate for irreversible deletes."""

from fastapi import HTTPException, Query, status


def require_confirmation(confirm: bool = Query(False, description="Must be true to delete")) -> None:
    """FastAPI dependency: refuses the request unless ?confirm=true was sent."""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_428_PRECONDITION_REQUIRED,
            detail="Deletion must be confirmed with ?confirm=true",
        )
