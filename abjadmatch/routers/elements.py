from fastapi import APIRouter, Request

from .. import schemas
from ..abjad_engine import ELEMENT_BY_ROOT
from ..config import settings
from ..limiter import limiter

router = APIRouter(prefix="/api", tags=["elements"])


@router.get("/elements", response_model=list[schemas.ElementResponse])
@limiter.limit(settings.rate_limit_read)
def list_elements(request: Request):
    """Element for every digital root, ordered by digit."""
    return [
        schemas.ElementResponse(
            digit=digit,
            name=element.name,
            icon=element.icon,
            css_class=element.css_class,
            arabic=element.arabic,
        )
        for digit, element in sorted(ELEMENT_BY_ROOT.items())
    ]
