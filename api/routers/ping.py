from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Tests"])


@router.get(
    "/ping/{name}",
    response_class=PlainTextResponse,
    summary="Show hello text",
    description="very very friendly response",
)
def api_ping(name: str) -> str:
    return f"Hello {name}"
