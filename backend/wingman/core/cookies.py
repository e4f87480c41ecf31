"""
Cookie slots: the storage port the history store reads and writes through.

Two implementations of the same port:
- ServerCookieSlot reads the inbound Cookie header of a request and writes
  Set-Cookie headers onto the outgoing response.
- ClientCookieSlot works directly on an httpx.Cookies jar, the way browser
  code works on document.cookie.

Values handed to a slot are already encoded; slots do no escaping of their own.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from http.cookiejar import Cookie
from typing import Iterator, Protocol

import httpx
from fastapi import Request, Response


class CookieSlot(Protocol):
    def get(self, name: str) -> str | None: ...

    def set(self, name: str, value: str, expires: datetime) -> None: ...

    def delete(self, name: str) -> None: ...

    def items(self) -> Iterator[tuple[str, str]]: ...


class ServerCookieSlot:
    """Request/response pair seen from inside a FastAPI handler."""

    def __init__(self, request: Request, response: Response) -> None:
        self.request = request
        self.response = response

    def get(self, name: str) -> str | None:
        return self.request.cookies.get(name)

    def set(self, name: str, value: str, expires: datetime) -> None:
        self.response.set_cookie(
            name,
            value,
            expires=expires,
            path="/",
            samesite="lax",
            httponly=False,
        )

    def delete(self, name: str) -> None:
        self.response.delete_cookie(name, path="/")

    def items(self) -> Iterator[tuple[str, str]]:
        # Only what the browser sent; cookies set earlier in this response are not visible.
        yield from self.request.cookies.items()


class ClientCookieSlot:
    """An httpx cookie jar, as held by a Python client of the API."""

    def __init__(self, cookies: httpx.Cookies, domain: str = "") -> None:
        self.cookies = cookies
        self.domain = domain

    def _live(self) -> Iterator[Cookie]:
        now = int(time.time())
        for cookie in self.cookies.jar:
            if cookie.path == "/" and not cookie.is_expired(now):
                yield cookie

    def get(self, name: str) -> str | None:
        for cookie in self._live():
            if cookie.name == name:
                return cookie.value
        return None

    def set(self, name: str, value: str, expires: datetime) -> None:
        self.cookies.jar.set_cookie(self._make_cookie(name, value, expires))

    def delete(self, name: str) -> None:
        epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
        for domain in self._domains_for(name):
            self.cookies.jar.set_cookie(self._make_cookie(name, "", epoch, domain))
        self.cookies.jar.clear_expired_cookies()

    def items(self) -> Iterator[tuple[str, str]]:
        for cookie in self._live():
            yield cookie.name, cookie.value

    def _domains_for(self, name: str) -> set[str]:
        domains = {c.domain for c in self.cookies.jar if c.name == name and c.path == "/"}
        return domains or {self.domain}

    def _make_cookie(
        self, name: str, value: str, expires: datetime, domain: str | None = None
    ) -> Cookie:
        domain = self.domain if domain is None else domain
        return Cookie(
            version=0,
            name=name,
            value=value,
            port=None,
            port_specified=False,
            domain=domain,
            domain_specified=bool(domain),
            domain_initial_dot=domain.startswith("."),
            path="/",
            path_specified=True,
            secure=False,
            expires=int(expires.timestamp()),
            discard=False,
            comment=None,
            comment_url=None,
            rest={"SameSite": "Lax"},
        )
