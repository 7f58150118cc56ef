"""Headless CMS API client.

This module defines a small client wrapper around the blog REST API
using the ``requests`` library.  It plays the part of the blog
frontend's data layer:

* :meth:`login` exchanges the admin password for a bearer token and
  keeps it on the client.
* :meth:`verify` checks a stored token and forgets it when the server
  no longer accepts it.
* :meth:`logout` revokes the token on the server and forgets it.
* :meth:`list_posts` and :meth:`get_post` are public reads.
* :meth:`create_post`, :meth:`update_post` and :meth:`delete_post`
  attach the token in an ``Authorization: Bearer`` header.

Every method returns a tuple ``(result, error)``.  On failure
``result`` is empty and ``error`` is a dictionary with the keys
``status_code`` and ``message``; ``errors`` is added when the server
reported individual validation problems.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class CMSClient:
    """Client for the headless CMS API."""

    def __init__(
        self,
        *,
        base_url: str = "http://localhost:8000/api",
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API including the ``/api`` prefix.
            token: Previously issued admin token, if any.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each HTTP request.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any | None = None,
        auth: bool = False,
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/posts``).
            json_body: JSON body to send with the request.
            auth: Attach the admin token as a bearer header.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {"Accept": "application/json"}
        if auth:
            if not self.token:
                return None, {"status_code": None, "message": "Not logged in"}
            headers["Authorization"] = f"Bearer {self.token}"
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
            return None, self._http_error(exc)
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _http_error(exc: requests.HTTPError) -> Error:
        response = exc.response
        status = response.status_code if response is not None else None
        error: Error = {"status_code": status, "message": ""}
        if response is not None:
            try:
                body = response.json()
            except ValueError:
                error["message"] = response.text
            else:
                if isinstance(body, dict):
                    error["message"] = body.get("error") or str(body)
                    if body.get("errors"):
                        error["errors"] = list(body["errors"])
                else:
                    error["message"] = str(body)
        if not error["message"]:
            error["message"] = str(exc)
        logger.error("API request failed (%s): %s", status, error["message"])
        return error

    # ------------------------------------------------------------------
    # Admin session
    # ------------------------------------------------------------------
    def login(self, password: str) -> Tuple[bool, Optional[Error]]:
        """Log in and keep the issued token on the client."""
        data, error = self._request("POST", "/admin/login", json_body={"password": password})
        if error:
            return False, error
        self.token = data["token"]
        return True, None

    def verify(self) -> Tuple[bool, Optional[Error]]:
        """Check the stored token; drop it if the server rejects it."""
        if not self.token:
            return False, None
        _, error = self._request("GET", "/admin/verify", auth=True)
        if error:
            if error.get("status_code") == 401:
                self.token = None
            return False, error
        return True, None

    def logout(self) -> Tuple[bool, Optional[Error]]:
        """Revoke the token on the server.  The local token is always dropped."""
        if not self.token:
            return True, None
        _, error = self._request("POST", "/admin/logout", auth=True)
        self.token = None
        if error:
            return False, error
        return True, None

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------
    def list_posts(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/posts")
        if error:
            return [], error
        return list(data.get("data", [])), None

    def get_post(self, post_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", f"/posts/{post_id}")
        if error:
            return None, error
        return data.get("data"), None

    def create_post(self, title: str, content: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        data, error = self._request(
            "POST", "/posts", json_body={"title": title, "content": content}, auth=True
        )
        if error:
            return None, error
        return data.get("data"), None

    def update_post(
        self,
        post_id: str,
        *,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Send only the fields that were given."""
        payload: Dict[str, str] = {}
        if title is not None:
            payload["title"] = title
        if content is not None:
            payload["content"] = content
        data, error = self._request("PATCH", f"/posts/{post_id}", json_body=payload, auth=True)
        if error:
            return None, error
        return data.get("data"), None

    def delete_post(self, post_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Delete a post and return the server's snapshot of it."""
        data, error = self._request("DELETE", f"/posts/{post_id}", auth=True)
        if error:
            return None, error
        return data.get("deleted_post"), None
