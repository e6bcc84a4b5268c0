from fastapi import APIRouter, Depends

from saathi.core.deps import get_roadmap_service
from saathi.models.roadmap import RoadmapRequest, RoadmapResponse
from saathi.services.roadmap_service import RoadmapService

router = APIRouter(prefix="/v1/roadmap", tags=["roadmap"])


@router.post("", response_model=RoadmapResponse)
def generate_roadmap(body: RoadmapRequest, service: RoadmapService = Depends(get_roadmap_service)):
    return service.generate(body)
