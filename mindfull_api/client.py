"""Mindfull API client.

A thin wrapper over the REST API for scripts and front-end helpers
written in Python.  The client uses the ``requests`` library and
exposes one method per operation:

* :meth:`list_users`, :meth:`get_user`, :meth:`create_user`,
  :meth:`update_user`, :meth:`delete_user`
* :meth:`list_entries`, :meth:`get_entry`, :meth:`create_entry`,
  :meth:`update_entry`, :meth:`delete_entry`

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dictionary
with keys ``status_code`` and ``message``, the latter taken from the
API's ``{"error": {"message": ...}}`` envelope when present.

Initialise the client with ``api_token='<token>'`` to send the
``Authorization: Bearer`` header the API requires.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class MindfullClient:
    """Client for the users and entries endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        api_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL including the API prefix, e.g.
                ``http://localhost:8000/api``.
            api_token: Bearer token sent with every request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``.  ``data`` is the parsed JSON
            body, or ``None`` for empty responses such as 204.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    if isinstance(err_json, dict) and isinstance(err_json.get("error"), dict):
                        message = err_json["error"].get("message") or ""
                    else:
                        message = str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def _delete(self, path: str) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", path)
        return error is None, error

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/users")

    def get_user(self, user_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/users/{user_id}")

    def create_user(self, username: str, pw: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/users", json_body={"username": username, "pw": pw})

    def update_user(self, user_id: int, fields: Dict[str, Any]) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("PATCH", f"/users/{user_id}", json_body=fields)
        return error is None, error

    def delete_user(self, user_id: int) -> Tuple[bool, Optional[Error]]:
        return self._delete(f"/users/{user_id}")

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------
    def list_entries(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/entries")

    def get_entry(self, entry_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/entries/{entry_id}")

    def create_entry(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create an entry.  ``payload`` must hold all nine entry fields."""
        return self._request("POST", "/entries", json_body=payload)

    def update_entry(self, entry_id: int, fields: Dict[str, Any]) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("PATCH", f"/entries/{entry_id}", json_body=fields)
        return error is None, error

    def delete_entry(self, entry_id: int) -> Tuple[bool, Optional[Error]]:
        return self._delete(f"/entries/{entry_id}")
