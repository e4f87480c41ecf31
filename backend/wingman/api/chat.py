from dataclasses import dataclass
from typing import Callable

import httpx
from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from wingman.config import get_settings
from wingman.core.history import HistoryStore, get_history_store
from wingman.core.openrouter import OpenRouterClient, UpstreamError, get_completion_client
from wingman.core.personalities import Personality, get_personality
from wingman.core.prompts import build_coach_prompt, build_messages, build_reply_prompt
from wingman.core.utils import generate_id, iso_timestamp
from wingman.models.chat import ApiError, ChatRequest, CoachResponse, ConversationMessage, ReplyResponse

router = APIRouter(prefix="/api", tags=["chat"])

MISSING_FIELDS = "Missing required fields: message, personality, apiKey"
DEFAULT_COACH_CONVERSATION = "coach"

ERROR_RESPONSES = {
    400: {"model": ApiError},
    500: {"model": ApiError},
    502: {"model": ApiError},
}


@dataclass(frozen=True)
class CompletionMode:
    name: str
    build_prompt: Callable[..., str]
    max_tokens: int
    temperature: float
    upstream_failure: str
    empty_fallback: str
    strip: bool = False


COACH = CompletionMode(
    name="coach",
    build_prompt=build_coach_prompt,
    max_tokens=1000,
    temperature=0.7,
    upstream_failure="Failed to get response from AI",
    empty_fallback="Sorry, I could not generate a response.",
)

REPLY = CompletionMode(
    name="reply",
    build_prompt=build_reply_prompt,
    max_tokens=200,
    temperature=0.8,
    upstream_failure="Failed to generate reply",
    empty_fallback="Sorry, I could not generate a reply.",
    strip=True,
)


def _resolve_personality(body: ChatRequest) -> Personality:
    if body.missing_required():
        raise HTTPException(status_code=400, detail=MISSING_FIELDS)
    personality = get_personality(body.personality)
    if personality is None:
        raise HTTPException(status_code=400, detail="Invalid personality selected")
    return personality


async def run_completion(
    mode: CompletionMode,
    body: ChatRequest,
    conversation_id: str | None,
    store: HistoryStore,
    completions: OpenRouterClient,
) -> tuple[str, str]:
    """
    Validate, assemble the prompt, call the model and persist the exchange.
    Returns (text, model). History is loaded only when the caller sent none,
    and persisted only when there is a conversation id to store it under.
    """
    personality = _resolve_personality(body)
    model = body.model or get_settings().default_model

    history = list(body.conversation_history)
    if not history and conversation_id:
        history = store.load(conversation_id)

    system_prompt = mode.build_prompt(personality, body.message, history, body.context)

    try:
        text = await completions.complete(
            api_key=body.api_key,
            model=model,
            messages=build_messages(system_prompt, history, body.message),
            max_tokens=mode.max_tokens,
            temperature=mode.temperature,
        )
    except UpstreamError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message or mode.upstream_failure)
    except httpx.HTTPError as e:
        logger.error(f"[{mode.name}] cannot reach OpenRouter: {e}")
        raise HTTPException(status_code=502, detail=mode.upstream_failure)

    if text and mode.strip:
        text = text.strip()
    text = text or mode.empty_fallback

    if conversation_id:
        store.save(
            conversation_id,
            [
                *history,
                ConversationMessage(role="user", content=body.message),
                ConversationMessage(role="assistant", content=text),
            ],
        )

    logger.info(
        f"[{mode.name}] personality={personality.id} model={model} "
        f"history={len(history)} conversation={conversation_id!r}"
    )
    return text, model


@router.post("/chat", response_model=CoachResponse, responses=ERROR_RESPONSES)
async def coach(
    body: ChatRequest,
    store: HistoryStore = Depends(get_history_store),
    completions: OpenRouterClient = Depends(get_completion_client),
) -> CoachResponse:
    conversation_id = body.conversation_id or DEFAULT_COACH_CONVERSATION
    try:
        text, model = await run_completion(COACH, body, conversation_id, store, completions)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Chat API error: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return CoachResponse(id=generate_id(), response=text, model=model, timestamp=iso_timestamp())


@router.post("/reply", response_model=ReplyResponse, responses=ERROR_RESPONSES)
async def reply(
    body: ChatRequest,
    store: HistoryStore = Depends(get_history_store),
    completions: OpenRouterClient = Depends(get_completion_client),
) -> ReplyResponse:
    try:
        text, model = await run_completion(REPLY, body, body.conversation_id, store, completions)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Reply API error: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return ReplyResponse(id=generate_id(), reply=text, model=model, timestamp=iso_timestamp())
