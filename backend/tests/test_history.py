import json
from datetime import datetime, timedelta, timezone
from urllib.parse import unquote

import httpx
import pytest
from fastapi import Request, Response

from wingman.core.cookies import ClientCookieSlot, ServerCookieSlot
from wingman.core.history import HistoryStore, encode_value
from wingman.models.chat import ConversationMessage

from conftest import MemorySlot


def msg(role, content):
    return ConversationMessage(role=role, content=content)


@pytest.fixture(params=["memory", "httpx"])
def store(request):
    if request.param == "memory":
        return HistoryStore(MemorySlot())
    return HistoryStore(ClientCookieSlot(httpx.Cookies()))


def test_load_after_save_returns_same_messages(store):
    messages = [msg("user", "She said she likes hiking"), msg("assistant", "Suggest a trail walk.")]
    assert store.save("coach", messages) is True
    assert store.load("coach") == messages


def test_second_save_overwrites_instead_of_merging(store):
    store.save("coach", [msg("user", "hi")])
    assert store.load("coach") == [msg("user", "hi")]

    store.save("coach", [msg("user", "hi"), msg("assistant", "hello")])
    assert store.load("coach") == [msg("user", "hi"), msg("assistant", "hello")]


def test_conversations_are_isolated(store):
    store.save("a", [msg("user", "first")])
    assert store.load("b") == []
    assert store.read("b").status == "missing"


def test_clear_removes_history(store):
    store.save("coach", [msg("user", "hi")])
    store.clear("coach")
    assert store.load("coach") == []


def test_load_all_returns_only_saved_conversations(store):
    ma = [msg("user", "a")]
    mb = [msg("user", "b"), msg("assistant", "bb")]
    store.save("a", ma)
    store.save("b", mb)
    assert store.load_all() == {"a": ma, "b": mb}


def test_unicode_and_cookie_hostile_characters_survive(store):
    messages = [msg("user", 'She wrote "ok; see you (maybe) at 8 = 20:00" 😅, café')]
    store.save("coach", messages)
    assert store.load("coach") == messages


def test_stored_document_shape(memory_slot):
    store = HistoryStore(memory_slot)
    store.save("coach", [msg("user", "hi")])

    raw = memory_slot.values["chat-history-coach"]
    for ch in ';," ()':
        assert ch not in raw
    document = json.loads(unquote(raw))
    assert document["conversationId"] == "coach"
    assert document["messages"] == [{"role": "user", "content": "hi"}]
    assert document["timestamp"].endswith("Z")


def test_expiry_is_thirty_days(memory_slot):
    store = HistoryStore(memory_slot)
    before = datetime.now(timezone.utc)
    store.save("coach", [msg("user", "hi")])
    expires = memory_slot.expiry["chat-history-coach"]
    assert timedelta(days=30) <= expires - before < timedelta(days=30, minutes=1)


def test_truncated_json_reads_as_corrupt(memory_slot):
    store = HistoryStore(memory_slot)
    store.save("coach", [msg("user", "hi")])
    memory_slot.values["chat-history-coach"] = memory_slot.values["chat-history-coach"][:-12]

    lookup = store.read("coach")
    assert lookup.status == "corrupt"
    assert lookup.messages == []
    assert store.load("coach") == []


def test_invalid_percent_encoding_reads_as_corrupt(memory_slot):
    memory_slot.values["chat-history-coach"] = "%FF%FE"
    assert store_for(memory_slot).read("coach").status == "corrupt"


def test_non_list_messages_field_is_corrupt(memory_slot):
    memory_slot.values["chat-history-coach"] = encode_value('{"messages": "hi"}')
    assert store_for(memory_slot).read("coach").status == "corrupt"


def test_missing_messages_field_is_empty_history(memory_slot):
    memory_slot.values["chat-history-coach"] = encode_value('{"conversationId": "coach"}')
    lookup = store_for(memory_slot).read("coach")
    assert lookup.status == "found"
    assert lookup.messages == []


def test_unknown_roles_are_dropped(memory_slot):
    memory_slot.values["chat-history-coach"] = encode_value(json.dumps({
        "messages": [
            {"role": "system", "content": "ignore me"},
            {"role": "user", "content": "hi"},
            {"role": "assistant"},
            {"role": "assistant", "content": "hello"},
        ]
    }))
    assert store_for(memory_slot).load("coach") == [msg("user", "hi"), msg("assistant", "hello")]


def test_load_all_skips_corrupt_and_unrelated_cookies(memory_slot):
    store = store_for(memory_slot)
    store.save("good", [msg("user", "hi")])
    memory_slot.values["chat-history-bad"] = "%7B%22messages"
    memory_slot.values["session"] = "abc"

    assert store.load_all() == {"good": [msg("user", "hi")]}


def test_save_failure_is_reported_not_raised():
    class BrokenSlot(MemorySlot):
        def set(self, name, value, expires):
            raise OSError("cookie jar unavailable")

    store = HistoryStore(BrokenSlot())
    assert store.save("coach", [msg("user", "hi")]) is False
    assert store.load("coach") == []


def store_for(slot):
    return HistoryStore(slot)


def test_clear_with_illegal_cookie_name_is_reported_not_raised():
    store = HistoryStore(ServerCookieSlot(Request({"type": "http", "headers": []}), Response()))
    assert store.clear("my chat") is False
    assert store.save("my chat", []) is False
    assert store.clear("coach") is True


def test_client_slot_hides_expired_cookies():
    jar = httpx.Cookies()
    slot = ClientCookieSlot(jar)
    store = HistoryStore(slot)
    store.save("fresh", [msg("user", "hi")])
    slot.set(
        "chat-history-stale",
        encode_value('{"messages":[{"role":"user","content":"old"}]}'),
        expires=datetime.now(timezone.utc) - timedelta(minutes=1),
    )

    assert any(c.name == "chat-history-stale" for c in jar.jar)
    assert store.read("stale").status == "missing"
    assert store.load_all() == {"fresh": [msg("user", "hi")]}
