"""Matches API router - run matches and fetch their summaries."""

from fastapi import APIRouter, HTTPException

from pitchgrid.api.schemas.match import MatchSummary, RunMatchRequest
from pitchgrid.api.services import match_service
from pitchgrid.exceptions import SynchronizationError

router = APIRouter(prefix="/matches", tags=["matches"])


@router.post("", response_model=MatchSummary)
async def run_match(request: RunMatchRequest):
    """
    Run a new match.

    The match runs to the final round before the response is sent.
    """
    try:
        return await match_service.run_match(request)
    except SynchronizationError as e:
        raise HTTPException(status_code=500, detail=f"Match stalled: {e}")


@router.get("", response_model=list[str])
async def list_matches():
    """List ids of stored matches."""
    return match_service.list_matches()


@router.get("/{match_id}", response_model=MatchSummary)
async def get_match(match_id: str):
    """Get a stored match summary."""
    summary = match_service.get_match(match_id)
    if summary is None:
        raise HTTPException(status_code=404, detail="Match not found")
    return summary


@router.delete("/{match_id}")
async def delete_match(match_id: str):
    """Forget a stored match."""
    if not match_service.delete_match(match_id):
        raise HTTPException(status_code=404, detail="Match not found")
    return {"status": "deleted", "match_id": match_id}
