"""Service branch endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, status

from ...data.branches import branches_for_market
from ...schemas.maps import BranchModel

router = APIRouter(prefix="/branches", tags=["branches"])


@router.get("", response_model=List[BranchModel], status_code=status.HTTP_200_OK)
def list_branches(market: str | None = Query(default=None, description="Optional market filter (PHX or LV)")) -> List[BranchModel]:
    return [BranchModel.from_domain(branch) for branch in branches_for_market(market)]
