"""Root greeting endpoint."""
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["root"])


@router.get("/", response_class=PlainTextResponse)
async def hello() -> str:
    """Answer authenticated clients checking that the API is reachable."""
    return "Hello, world!"
