from fastapi import APIRouter, status, Depends

from shortlinks.api.deps import get_base_url, get_link_service
from shortlinks.schemas.links import CreateLinkRequest, LinkCreated, LinkStats
from shortlinks.services.links import LinkService, build_short_url

router = APIRouter(prefix="/api/v1")

@router.post("/links",
          response_model=LinkCreated,
          status_code=status.HTTP_201_CREATED
)
def create_link(
    req: CreateLinkRequest,
    service: LinkService = Depends(get_link_service),
    base_url: str = Depends(get_base_url),
):
    code = service.shorten(req.long_url)

    return LinkCreated(
        code=code,
        short_url=build_short_url(base_url, code),
        long_url=req.long_url,
    )

@router.get("/links/{code}", response_model=LinkStats)
def get_link(
    code: str,
    service: LinkService = Depends(get_link_service),
    base_url: str = Depends(get_base_url),
):
    record = service.lookup(code)

    return LinkStats(
        code=record.short_code,
        short_url=build_short_url(base_url, record.short_code),
        long_url=record.long_url,
        times_followed=record.times_followed,
        created_at=record.created_at,
    )
