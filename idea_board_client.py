"""Idea Board API client.

This module defines a small client wrapper around the Idea Board REST
API.  It uses the ``requests`` library internally and exposes one
method per endpoint:

* :meth:`IdeaBoardClient.health` – check that the API is running.
* :meth:`IdeaBoardClient.list_ideas` – fetch all ideas, most upvoted first.
* :meth:`IdeaBoardClient.create_idea` – submit a new idea.
* :meth:`IdeaBoardClient.upvote_idea` – add one upvote to an idea.

Every method returns a tuple ``(data, error)`` instead of raising, so
callers such as :mod:`idea_board_view` can log failures and keep their
state unchanged.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.getenv("IDEA_BOARD_API_URL", "http://localhost:3001")

ApiError = Dict[str, Any]


class IdeaBoardClient:
    """Client for the ``/api`` endpoints of the Idea Board service."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3001``.
                The ``/api`` prefix is added by the client.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Socket timeout in seconds for each request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET`` or ``POST``).
            path: Path below ``/api`` (e.g. ``/ideas``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``. On failure,
            ``data`` is ``None`` and ``error`` is a dictionary with keys
            ``status_code`` and ``message`` describing the issue.
        """
        url = f"{self.base_url}/api{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
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
                    body = exc.response.json()
                    message = body.get("error", "") if isinstance(body, dict) else str(body)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}
        except ValueError as exc:
            logger.error("API returned invalid JSON: %s", exc)
            return None, {"status_code": None, "message": "Invalid JSON response"}

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------
    def health(self) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("GET", "/health")

    def list_ideas(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve all ideas.

        Returns:
            A tuple ``(ideas, error)``. ``ideas`` is empty on failure.
        """
        data, error = self._request("GET", "/ideas")
        if error:
            return [], error
        if not isinstance(data, list):
            logger.warning("Unexpected idea list payload: %r", data)
            return [], {"status_code": None, "message": "Unexpected response"}
        return data, None

    def create_idea(self, text: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Submit a new idea.

        Args:
            text: The idea text; the server trims it and enforces 1–280
                characters.
        """
        return self._request("POST", "/ideas", json_body={"text": text})

    def upvote_idea(self, idea_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Add one upvote to the idea and return the server's updated copy."""
        return self._request("POST", f"/ideas/{idea_id}/upvote")
