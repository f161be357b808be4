"""Generation router."""

from fastapi import APIRouter, Depends, HTTPException, status
import structlog

from ..dependencies import generate_rate_limit, get_orchestrator
from ..orchestrator import GenerationOrchestrator
from ..schemas import GenerateRequest, GenerateResponse

logger = structlog.get_logger()

router = APIRouter(
    prefix="/generate",
    tags=["generate"],
    dependencies=[Depends(generate_rate_limit)],
)


@router.post("", response_model=GenerateResponse, status_code=status.HTTP_202_ACCEPTED)
async def generate_project(
    request_in: GenerateRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> GenerateResponse:
    """Create a project and start generating it in the background."""
    ticket = await orchestrator.submit(request_in)

    return GenerateResponse(
        project_id=ticket.project_id,
        message="Project generation started",
        estimated_time=ticket.estimated_time,
    )


@router.post("/{project_id}/regenerate", response_model=GenerateResponse)
async def regenerate_project(
    project_id: str,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> GenerateResponse:
    """Restart generation of an existing project."""
    ticket = await orchestrator.regenerate(project_id)
    if ticket is None:
        logger.warning("regenerate_unknown_project", project_id=project_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    return GenerateResponse(
        project_id=ticket.project_id,
        message="Project regeneration started",
        estimated_time=ticket.estimated_time,
    )
