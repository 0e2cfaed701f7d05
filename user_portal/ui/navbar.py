"""
Navigation bar for the portal frontend.

The bar shows a Home link, plus either a Login link or a Logout button.
Whether a session is active is asked from the backend (GET /session) and kept
on the Navbar instance; logout goes through POST /logout.
"""
from __future__ import annotations

import logging
from html import escape
from typing import Any, List, Optional

import httpx
from pydantic import BaseModel

LOGGER = logging.getLogger(__name__)

HOME_ROUTE = "/"
LOGIN_ROUTE = "/login"


class NavItem(BaseModel):
    label: str
    href: Optional[str] = None
    # buttons trigger an action instead of navigating
    action: Optional[str] = None

    @property
    def is_button(self) -> bool:
        return self.action is not None


def nav_items(authenticated: bool) -> List[NavItem]:
    """Home always, then Logout when authenticated, Login otherwise."""
    items = [NavItem(label="Home", href=HOME_ROUTE)]
    if authenticated:
        items.append(NavItem(label="Logout", action="logout"))
    else:
        items.append(NavItem(label="Login", href=LOGIN_ROUTE))
    return items


class SessionClient:
    """Thin httpx wrapper around the session endpoints of the backend."""

    def __init__(self, base_url: str, transport: Optional[httpx.BaseTransport] = None):
        self._client = httpx.Client(base_url=base_url, transport=transport)

    def check_session(self) -> bool:
        response = self._client.get("/session")
        response.raise_for_status()
        return bool(response.json().get("authenticated"))

    def login(self, email: str, password: str) -> httpx.Response:
        """The session cookie lands in this client's cookie jar."""
        response = self._client.post("/login", json={"email": email, "password": password})
        response.raise_for_status()
        return response

    def logout(self) -> httpx.Response:
        response = self._client.post("/logout")
        response.raise_for_status()
        return response

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SessionClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _error_payload(exc: httpx.HTTPError) -> Any:
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            return exc.response.json()
        except ValueError:
            return exc.response.text
    return str(exc)


class Navbar:
    def __init__(self, client: SessionClient, authenticated: bool = False):
        self.client = client
        self.authenticated = authenticated

    def refresh(self) -> bool:
        """Re-read the session state from the backend."""
        try:
            self.authenticated = self.client.check_session()
        except httpx.HTTPError as exc:
            LOGGER.error("Session check failed: %s", _error_payload(exc))
            self.authenticated = False
        return self.authenticated

    @property
    def items(self) -> List[NavItem]:
        return nav_items(self.authenticated)

    def handle_logout(self) -> Optional[str]:
        """
        Log out through the backend.

        Returns the route to navigate to (the login page) on success, or None
        when the call failed; the error payload is logged and state is kept.
        """
        try:
            response = self.client.logout()
        except httpx.HTTPError as exc:
            LOGGER.error("Logout failed: %s", _error_payload(exc))
            return None

        if response.status_code != httpx.codes.OK:
            LOGGER.error(
                "Logout failed: unexpected status %s: %s",
                response.status_code,
                response.text,
            )
            return None

        self.authenticated = False
        return LOGIN_ROUTE

    def render(self) -> str:
        parts = ['<ul class="navbar">']
        for item in self.items:
            if item.is_button:
                parts.append(
                    f'<li><button type="button" class="btn btn-outline-light" '
                    f'data-action="{escape(item.action)}">{escape(item.label)}</button></li>'
                )
            else:
                parts.append(
                    f'<li><a class="btn btn-outline-light" href="{escape(item.href)}">'
                    f"{escape(item.label)}</a></li>"
                )
        parts.append("</ul>")
        return "".join(parts)
