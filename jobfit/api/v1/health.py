from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check that the matching engine is loaded.")
async def health_check(request: Request):
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        return {"status": "starting"}
    return {"status": "healthy", "cached_analyses": len(engine.cache)}
