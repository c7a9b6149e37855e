import logging

from fastapi import APIRouter, Depends, Request

from .. import schemas
from ..abjad_engine import compute_compatibility
from ..config import settings
from ..dependencies import get_store
from ..errors import RecordNotFoundError
from ..limiter import limiter
from ..sharing import build_share_links, generate_share_text
from ..storage import CompatibilityStore

router = APIRouter(prefix="/api", tags=["compatibility"])
logger = logging.getLogger("abjadmatch.compat")


def _compute(payload: schemas.CompatibilityRequest):
    return compute_compatibility(
        name_1=payload.partner1_name,
        name_2=payload.partner2_name,
        date_of_birth_1=payload.partner1_date_of_birth,
        date_of_birth_2=payload.partner2_date_of_birth,
        birth_time_1=payload.partner1_birth_time,
        birth_time_2=payload.partner2_birth_time,
    )


@router.post("/compatibility/calculate", response_model=schemas.CompatibilityComputationResponse)
@limiter.limit(settings.rate_limit_read)
def calculate_compatibility(request: Request, payload: schemas.CompatibilityRequest):
    """Score two partners without storing the result."""
    computation = _compute(payload)
    return schemas.CompatibilityComputationResponse(**computation.to_dict())


@router.get("/compatibility-results", response_model=list[schemas.CompatibilityResultResponse])
@limiter.limit(settings.rate_limit_read)
def list_results(request: Request, store: CompatibilityStore = Depends(get_store)):
    records = store.list()
    return [schemas.CompatibilityResultResponse(**record.to_dict()) for record in records]


@router.post(
    "/compatibility-results",
    response_model=schemas.CompatibilityResultResponse,
    status_code=201,
)
@limiter.limit(settings.rate_limit_write)
def create_result(
    request: Request,
    payload: schemas.CompatibilityRequest,
    store: CompatibilityStore = Depends(get_store),
):
    computation = _compute(payload)
    record = store.create(computation)
    logger.info(
        "Compatibility stored | id=%s | elements=%s/%s | overall=%s | life_path=%s",
        record.id,
        record.partner1_element,
        record.partner2_element,
        record.overall_compatibility_score,
        record.life_path_compatibility_score,
    )
    return schemas.CompatibilityResultResponse(**record.to_dict())


@router.delete("/compatibility-results", response_model=schemas.ClearResultsResponse)
@limiter.limit(settings.rate_limit_write)
def clear_results(request: Request, store: CompatibilityStore = Depends(get_store)):
    removed = store.clear()
    return schemas.ClearResultsResponse(removed=removed)


@router.get("/compatibility-results/{record_id}", response_model=schemas.CompatibilityResultResponse)
@limiter.limit(settings.rate_limit_read)
def get_result(request: Request, record_id: int, store: CompatibilityStore = Depends(get_store)):
    record = store.get(record_id)
    if record is None:
        raise RecordNotFoundError(record_id)
    return schemas.CompatibilityResultResponse(**record.to_dict())


@router.get("/compatibility-results/{record_id}/share", response_model=schemas.ShareResponse)
@limiter.limit(settings.rate_limit_read)
def share_result(request: Request, record_id: int, store: CompatibilityStore = Depends(get_store)):
    record = store.get(record_id)
    if record is None:
        raise RecordNotFoundError(record_id)
    text = generate_share_text(record)
    links = build_share_links(text, settings.public_base_url)
    return schemas.ShareResponse(text=text, links=schemas.ShareLinks(**links))
