from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from wingman.core.history import HistoryStore, get_history_store
from wingman.models.history import HistoryOut, SaveHistoryRequest

router = APIRouter(prefix="/api", tags=["history"])


# ── Diagnostics ─────────────────────────────────────────────────────────────────

@router.get("/test-cookies")
async def read_test_cookies(store: HistoryStore = Depends(get_history_store)):
    try:
        conversations = store.load_all()
    except Exception as e:
        logger.exception(f"Test cookies error: {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to read cookies"},
        )

    return {
        "success": True,
        "cookieCount": len(conversations),
        "conversations": {
            cid: [m.model_dump() for m in messages]
            for cid, messages in conversations.items()
        },
    }


@router.post("/test-cookies")
async def write_test_cookie(
    body: SaveHistoryRequest,
    store: HistoryStore = Depends(get_history_store),
):
    if not store.save(body.conversation_id, body.messages):
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to save test cookie"},
        )
    return {"success": True, "message": "Test cookie saved"}


# ── History ─────────────────────────────────────────────────────────────────────

@router.get("/history")
async def list_history(store: HistoryStore = Depends(get_history_store)):
    return {
        "conversations": {
            cid: [m.model_dump() for m in messages]
            for cid, messages in store.load_all().items()
        }
    }


@router.get("/history/{conversation_id}", response_model=HistoryOut)
async def get_history(
    conversation_id: str,
    store: HistoryStore = Depends(get_history_store),
) -> HistoryOut:
    lookup = store.read(conversation_id)
    return HistoryOut(
        conversation_id=conversation_id,
        status=lookup.status,
        messages=lookup.messages,
    )


@router.delete("/history/{conversation_id}")
async def clear_history(
    conversation_id: str,
    store: HistoryStore = Depends(get_history_store),
):
    cleared = store.clear(conversation_id)
    return {"conversationId": conversation_id, "cleared": cleared}
