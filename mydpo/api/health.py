from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/live")
def live():
    return {"status": "alive"}


@router.get("/ready")
def ready(request: Request):
    state = request.app.state
    is_ready = (
        getattr(state, "org_repo", None) is not None
        and getattr(state, "audit_repo", None) is not None
    )
    return {"status": "ready" if is_ready else "degraded"}
