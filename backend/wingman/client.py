"""
Python client for the Wingman API.

Holds one httpx.Client so the history cookies the server sets come back on
the next call. History can be read and cleared locally through the same jar,
without a round trip.
"""

from typing import Any

import httpx

from wingman.core.cookies import ClientCookieSlot
from wingman.core.history import HistoryStore
from wingman.models.chat import ConversationMessage
from wingman.models.history import HistoryLookup


class WingmanAPIError(Exception):
    def __init__(self, status_code: int, error: str) -> None:
        super().__init__(f"{status_code}: {error}")
        self.status_code = status_code
        self.error = error


def _cookie_domain(host: str) -> str:
    # http.cookiejar stores cookies for dotless hosts under "<host>.local"
    return host if "." in host else f"{host}.local"


class WingmanClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        api_key: str | None = None,
        http: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.http = http or httpx.Client(base_url=base_url, timeout=90.0)
        self.history_store = HistoryStore(
            ClientCookieSlot(self.http.cookies, domain=_cookie_domain(self.http.base_url.host))
        )

    def __enter__(self) -> "WingmanClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.http.close()

    def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        resp = self.http.post(path, json=payload)
        if resp.is_error:
            try:
                error = resp.json().get("error") or resp.reason_phrase
            except ValueError:
                error = resp.reason_phrase
            raise WingmanAPIError(resp.status_code, str(error))
        return resp.json()

    def _payload(
        self,
        message: str,
        personality: str,
        context: str | None,
        model: str | None,
        conversation_id: str | None,
        history: list[ConversationMessage] | None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "message": message,
            "personality": personality,
            "apiKey": self.api_key,
        }
        if context:
            payload["context"] = context
        if model:
            payload["model"] = model
        if conversation_id:
            payload["conversationId"] = conversation_id
        if history:
            payload["conversationHistory"] = [m.model_dump() for m in history]
        return payload

    def coach(
        self,
        message: str,
        personality: str,
        context: str | None = None,
        model: str | None = None,
        conversation_id: str | None = None,
        history: list[ConversationMessage] | None = None,
    ) -> str:
        data = self._post(
            "/api/chat",
            self._payload(message, personality, context, model, conversation_id, history),
        )
        return data["response"]

    def reply(
        self,
        message: str,
        personality: str,
        context: str | None = None,
        model: str | None = None,
        conversation_id: str | None = None,
        history: list[ConversationMessage] | None = None,
    ) -> str:
        data = self._post(
            "/api/reply",
            self._payload(message, personality, context, model, conversation_id, history),
        )
        return data["reply"]

    def history(self, conversation_id: str) -> HistoryLookup:
        return self.history_store.read(conversation_id)

    def all_history(self) -> dict[str, list[ConversationMessage]]:
        return self.history_store.load_all()

    def forget(self, conversation_id: str) -> None:
        self.history_store.clear(conversation_id)
