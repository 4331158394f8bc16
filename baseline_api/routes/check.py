"""Check route (single feature lookup)."""

from fastapi import APIRouter

from ..schemas import CheckRequest, FeatureCheckOut
from ..utils import lookup_feature

router = APIRouter()


@router.post("/check", response_model=FeatureCheckOut, response_model_by_alias=True)
def check(req: CheckRequest) -> FeatureCheckOut:
    """Point query. No file scanning, no AI."""
    return FeatureCheckOut(**lookup_feature(req.token, req.target).to_dict())
