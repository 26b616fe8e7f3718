import json
import logging

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from jobtolk.database import get_db
from jobtolk.routers.jobs import job_to_response
from jobtolk.routers.profiles import profile_to_response
from jobtolk.schemas.search import (
    EntityKind,
    FreelancerHit,
    FreelancerSearchResponse,
    JobHit,
    JobSearchResponse,
    SearchFilters,
)
from jobtolk.services.coarse_filter import fetch_entities
from jobtolk.services.dispatcher import SearchDispatcher
from jobtolk.services.search_service import SearchOutcome, rank_entities, search

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


def outcome_to_response(outcome: SearchOutcome) -> JobSearchResponse | FreelancerSearchResponse:
    if outcome.kind == EntityKind.JOBS:
        return JobSearchResponse(
            query=outcome.query,
            total=len(outcome.results),
            results=[JobHit(score=r.score, item=job_to_response(r.entity)) for r in outcome.results],
            error=outcome.error,
        )
    return FreelancerSearchResponse(
        query=outcome.query,
        total=len(outcome.results),
        results=[
            FreelancerHit(score=r.score, item=profile_to_response(r.entity))
            for r in outcome.results
        ],
        error=outcome.error,
    )


@router.get("/jobs", response_model=JobSearchResponse)
async def search_jobs(
    q: str = Query(""),
    category: str | None = None,
    job_type: str | None = None,
    budget_min: float | None = Query(None, ge=0),
    budget_max: float | None = Query(None, ge=0),
    location: str | None = None,
    db: Session = Depends(get_db),
):
    filters = SearchFilters(
        query=q,
        category=category,
        job_type=job_type,
        budget_min=budget_min,
        budget_max=budget_max,
        location=location,
    )
    return outcome_to_response(search(db, filters, EntityKind.JOBS))


@router.get("/freelancers", response_model=FreelancerSearchResponse)
async def search_freelancers(
    q: str = Query(""),
    service_type: str | None = Query(None, pattern="^(remote|local)$"),
    location: str | None = None,
    skills: list[str] = Query([]),
    service_categories: list[str] = Query([]),
    db: Session = Depends(get_db),
):
    filters = SearchFilters(
        query=q,
        service_type=service_type,
        location=location,
        skills=skills,
        service_categories=service_categories,
    )
    return outcome_to_response(search(db, filters, EntityKind.FREELANCERS))


@router.websocket("/live")
async def live_search(websocket: WebSocket, db: Session = Depends(get_db)):
    """Search-as-you-type: bursts of messages collapse into one search."""
    await websocket.accept()

    async def fetch(filters: SearchFilters, kind: EntityKind) -> list:
        return fetch_entities(db, filters, kind)

    async def send(outcome: SearchOutcome) -> None:
        await websocket.send_json(outcome_to_response(outcome).model_dump(mode="json"))

    dispatcher = SearchDispatcher(fetch, rank_entities, send)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
                if not isinstance(message, dict):
                    raise ValueError("expected a JSON object")
                kind = EntityKind(message.get("kind", EntityKind.JOBS.value))
                if message.get("action") == "clear":
                    dispatcher.cancel()
                    await send(SearchOutcome(kind=kind, query=""))
                    continue
                filters = SearchFilters.model_validate(message.get("filters") or {})
            except ValueError as exc:
                await websocket.send_json({"error": f"Invalid search message: {exc}"})
                continue
            dispatcher.dispatch(filters, kind)
    except WebSocketDisconnect:
        logger.debug("Live search client disconnected")
        dispatcher.cancel()
