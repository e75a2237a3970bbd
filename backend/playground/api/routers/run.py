import time
from fastapi import APIRouter, Depends
from playground.api.deps import get_gateway
from playground.sandbox.gateway import ExecutionGateway
from playground.schemas.run import (
    LanguageOut,
    LegacyRunIn,
    LegacyRunOut,
    RunCreate,
    RunOut,
)

router = APIRouter(tags=["runs"])


@router.get("/languages", response_model=list[LanguageOut])
async def list_languages(gateway: ExecutionGateway = Depends(get_gateway)):
    return gateway.languages()


@router.post("/run", response_model=RunOut)
async def run_code(
    payload: RunCreate, gateway: ExecutionGateway = Depends(get_gateway)
):
    start = time.monotonic()
    result = await gateway.execute(payload.language, payload.source)
    return RunOut(
        outcome=result.outcome,
        text=result.text,
        wall_ms=int((time.monotonic() - start) * 1000),
    )


# {code} -> {output} shape used by older editor builds
@router.post("/run/{language}", response_model=LegacyRunOut)
async def run_legacy(
    language: str,
    payload: LegacyRunIn,
    gateway: ExecutionGateway = Depends(get_gateway),
):
    result = await gateway.execute(language, payload.code)
    return LegacyRunOut(output=result.text or "No output")
