"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from repo_briefing.interface.dependencies import get_use_case
from repo_briefing.interface.schemas import BriefingRequest, BriefingResponse
from repo_briefing.services.brief_repo import BriefRepoUseCase

router = APIRouter()


@router.post(
    "/briefings",
    response_model=BriefingResponse,
    responses={
        422: {"description": "Missing input field or invalid GitHub URL"},
        404: {"description": "Repository not found"},
        502: {"description": "GitHub or LLM provider error"},
    },
)
async def create_briefing(
    body: BriefingRequest,
    use_case: BriefRepoUseCase = Depends(get_use_case),
) -> BriefingResponse:
    """Brief a public GitHub repository and store the record in the dataset."""
    record = await use_case.execute(body.model_dump())
    return BriefingResponse.from_record(record)
