from fastapi import APIRouter

router = APIRouter()


@router.get("")
def health():
    return {"status": "ok"}


@router.get("/live")
def liveness_probe():
    return {"status": "ok"}
