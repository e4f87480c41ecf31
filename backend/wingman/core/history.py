"""
Cookie-backed conversation history.

One JSON document per conversation id, stored percent-encoded under
`chat-history-<conversation_id>` and kept for 30 days after the last write.
Each save overwrites the whole document; the caller passes the full transcript.

Persistence is best-effort: nothing in here raises into the request that
triggered it. Failures are logged and surface as an empty history
(`HistoryLookup.status == "corrupt"`) or a False return from save() or clear().
"""

import json
from datetime import timedelta
from typing import Any, Iterable
from urllib.parse import quote, unquote

from fastapi import Request, Response
from loguru import logger
from pydantic import ValidationError

from wingman.config import get_settings
from wingman.core.cookies import CookieSlot, ServerCookieSlot
from wingman.core.utils import iso_timestamp, utc_now
from wingman.models.chat import ConversationMessage
from wingman.models.history import ConversationHistory, HistoryLookup

HISTORY_PREFIX = "chat-history-"
RETENTION_DAYS = 30

# encodeURIComponent's unreserved set minus "(" and ")", which are not legal in an unquoted cookie value
_SAFE_CHARS = "-_.!~*'"


def encode_value(text: str) -> str:
    return quote(text, safe=_SAFE_CHARS)


def decode_value(value: str) -> str:
    return unquote(value, errors="strict")


class CorruptHistory(ValueError):
    """Stored history document could not be decoded."""


def _normalize_messages(raw: Any) -> list[ConversationMessage]:
    """Keep well-formed user/assistant messages, drop anything else."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise CorruptHistory(f"messages is {type(raw).__name__}, expected list")

    messages: list[ConversationMessage] = []
    for item in raw:
        try:
            messages.append(ConversationMessage.model_validate(item))
        except ValidationError:
            logger.warning(f"[history] dropping malformed message: {item!r:.80}")
    return messages


def parse_document(value: str) -> list[ConversationMessage]:
    """Decode one stored cookie value into its messages. Raises CorruptHistory."""
    try:
        data = json.loads(decode_value(value))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorruptHistory(str(e)) from e

    if not isinstance(data, dict):
        raise CorruptHistory(f"document is {type(data).__name__}, expected object")
    return _normalize_messages(data.get("messages"))


class HistoryStore:
    def __init__(
        self,
        slot: CookieSlot,
        prefix: str = HISTORY_PREFIX,
        retention_days: int = RETENTION_DAYS,
    ) -> None:
        self.slot = slot
        self.prefix = prefix
        self.retention_days = retention_days

    def key_for(self, conversation_id: str) -> str:
        return f"{self.prefix}{conversation_id}"

    def save(self, conversation_id: str, messages: Iterable[ConversationMessage]) -> bool:
        """Overwrite the stored transcript. Returns False (and logs) on failure."""
        try:
            now = utc_now()
            document = ConversationHistory(
                conversation_id=conversation_id,
                messages=list(messages),
                timestamp=iso_timestamp(now),
            )
            payload = document.model_dump_json(by_alias=True)
            self.slot.set(
                self.key_for(conversation_id),
                encode_value(payload),
                expires=now + timedelta(days=self.retention_days),
            )
        except Exception as e:
            logger.error(f"[history] failed to save {conversation_id!r}: {e}")
            return False

        logger.debug(
            f"[history] saved {conversation_id!r} messages={len(document.messages)} "
            f"bytes={len(payload)}"
        )
        return True

    def read(self, conversation_id: str) -> HistoryLookup:
        value = self.slot.get(self.key_for(conversation_id))
        if value is None:
            return HistoryLookup(status="missing")

        try:
            messages = parse_document(value)
        except CorruptHistory as e:
            logger.warning(f"[history] unreadable history for {conversation_id!r}: {e}")
            return HistoryLookup(status="corrupt")

        return HistoryLookup(status="found", messages=messages)

    def load(self, conversation_id: str) -> list[ConversationMessage]:
        return self.read(conversation_id).messages

    def load_all(self) -> dict[str, list[ConversationMessage]]:
        history: dict[str, list[ConversationMessage]] = {}
        for name, value in self.slot.items():
            if not name.startswith(self.prefix):
                continue
            conversation_id = name[len(self.prefix):]
            try:
                history[conversation_id] = parse_document(value)
            except CorruptHistory as e:
                logger.warning(f"[history] skipping cookie {name!r}: {e}")
        return history

    def clear(self, conversation_id: str) -> bool:
        """Expire the stored transcript. Returns False (and logs) on failure."""
        try:
            self.slot.delete(self.key_for(conversation_id))
        except Exception as e:
            logger.error(f"[history] failed to clear {conversation_id!r}: {e}")
            return False

        logger.debug(f"[history] cleared {conversation_id!r}")
        return True


def get_history_store(request: Request, response: Response) -> HistoryStore:
    settings = get_settings()
    return HistoryStore(
        ServerCookieSlot(request, response),
        prefix=settings.history_cookie_prefix,
        retention_days=settings.history_retention_days,
    )
