"""Terminal client for the Idea Board.

This module implements the single view of the board on top of
:class:`idea_board_client.IdeaBoardClient`:

* List ideas, most upvoted first, with their vote counts.
* Submit a new idea (1–280 characters).
* Upvote an idea by its position in the list.
* Refresh the list on demand, and automatically every 30 seconds
  while the view is mounted.

:class:`IdeaBoardView` holds the state and behaviour and can be
driven programmatically; :func:`main` wraps it in an interactive
prompt.  The API location is read from ``--api-url`` or the
``IDEA_BOARD_API_URL`` environment variable.

Request failures are only logged; the view keeps showing its last
known state.
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional

from idea_board_client import DEFAULT_BASE_URL, IdeaBoardClient


logger = logging.getLogger(__name__)

MAX_IDEA_LENGTH = 280
POLL_INTERVAL_SECONDS = 30.0


class IdeaBoardView:
    """State and behaviour of the idea board screen."""

    def __init__(self, client: IdeaBoardClient, poll_interval: float = POLL_INTERVAL_SECONDS) -> None:
        self.client = client
        self.poll_interval = poll_interval
        self.ideas: List[Dict[str, Any]] = []
        self.draft = ""
        self.loading = False
        self.submitting = False
        # The poller thread and the caller both update ``ideas``.
        self._lock = threading.RLock()
        self._stop = threading.Event()
        self._poller: Optional[threading.Thread] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def mounted(self) -> bool:
        return self._poller is not None and self._poller.is_alive()

    def mount(self) -> None:
        """Fetch the list once and start polling in the background."""
        if self.mounted:
            return
        self.refresh()
        self._stop.clear()
        self._poller = threading.Thread(target=self._poll_loop, name="idea-board-poller", daemon=True)
        self._poller.start()

    def unmount(self) -> None:
        """Stop polling.  Safe to call more than once.

        Waits for a fetch already in flight (bounded by the client's
        request timeout), so a later ``mount`` never finds the old poller
        still running.
        """
        self._stop.set()
        if self._poller is not None:
            self._poller.join()
            self._poller = None

    def _poll_loop(self) -> None:
        while not self._stop.wait(self.poll_interval):
            self.refresh()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Re-fetch the list.  Whichever fetch finishes last wins."""
        with self._lock:
            self.loading = True
        try:
            ideas, error = self.client.list_ideas()
        finally:
            with self._lock:
                self.loading = False
        if error:
            logger.error("Error fetching ideas: %s", error["message"])
            return
        with self._lock:
            self.ideas = ideas

    def set_draft(self, text: str) -> None:
        self.draft = text

    @property
    def can_submit(self) -> bool:
        return bool(self.draft.strip()) and len(self.draft) <= MAX_IDEA_LENGTH and not self.submitting

    def submit(self) -> bool:
        """Send the draft.  On success the new idea goes to the top of the list."""
        if not self.can_submit:
            return False
        self.submitting = True
        try:
            idea, error = self.client.create_idea(self.draft.strip())
        finally:
            self.submitting = False
        if error:
            logger.error("Error submitting idea: %s", error["message"])
            return False
        with self._lock:
            self.ideas.insert(0, idea)
            self.draft = ""
        return True

    def upvote(self, idea_id: str) -> bool:
        """Upvote an idea and swap in the server's copy without re-sorting."""
        idea, error = self.client.upvote_idea(idea_id)
        if error:
            logger.error("Error upvoting idea: %s", error["message"])
            return False
        with self._lock:
            self.ideas = [idea if item["id"] == idea_id else item for item in self.ideas]
        return True

    def upvote_at(self, position: int) -> bool:
        """Upvote the idea shown at ``position`` (1-based)."""
        with self._lock:
            if not 1 <= position <= len(self.ideas):
                return False
            idea_id = self.ideas[position - 1]["id"]
        return self.upvote(idea_id)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    @staticmethod
    def _format_timestamp(value: str) -> str:
        try:
            created = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except (AttributeError, ValueError):
            return str(value)
        return created.astimezone().strftime("%Y-%m-%d %H:%M")

    def render(self) -> str:
        with self._lock:
            ideas = list(self.ideas)
            loading = self.loading
        lines = [f"The Idea Board ({len(ideas)} ideas shared)", ""]

        counter = f"Draft: {len(self.draft)}/{MAX_IDEA_LENGTH} characters"
        if len(self.draft) > MAX_IDEA_LENGTH:
            counter += "  Too long! Please shorten your idea."
        lines.append(counter)
        lines.append("")

        if loading and not ideas:
            lines.append("Loading ideas...")
        elif not ideas:
            lines.append("No ideas yet. Be the first to share a brilliant idea!")
        else:
            for position, idea in enumerate(ideas, start=1):
                lines.append(f"{position:>3}. [{idea['upvotes']:>3} ▲] {idea['text']}")
                lines.append(f"            {self._format_timestamp(idea['created_at'])}")
        return "\n".join(lines)


HELP_TEXT = (
    "Commands:\n"
    "  add <text>   share a new idea (max 280 characters)\n"
    "  up <n>       upvote the idea at position n\n"
    "  refresh      reload the list\n"
    "  help         show this message\n"
    "  quit         exit"
)


def handle_command(view: IdeaBoardView, line: str) -> Optional[str]:
    """Run one prompt command and return the text to show, or ``None`` to quit."""
    command, _, args = line.strip().partition(" ")
    command = command.lower()
    if command in {"quit", "exit", "q"}:
        return None
    if command in {"", "list", "ls"}:
        return view.render()
    if command == "refresh":
        view.refresh()
        return view.render()
    if command == "add":
        view.set_draft(args)
        if not view.can_submit:
            return view.render() + "\n\nIdea must be 1-280 characters."
        if not view.submit():
            return "Could not share the idea; see the log for details."
        return view.render()
    if command in {"up", "upvote"}:
        try:
            position = int(args)
        except ValueError:
            return "Usage: up <n>"
        if not view.upvote_at(position):
            return f"Could not upvote idea {position}."
        return view.render()
    return HELP_TEXT


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Browse, share and upvote ideas.")
    ap.add_argument("--api-url", default=DEFAULT_BASE_URL, help="Base URL of the Idea Board API")
    ap.add_argument(
        "--interval", type=float, default=POLL_INTERVAL_SECONDS, help="Seconds between automatic refreshes"
    )
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    view = IdeaBoardView(IdeaBoardClient(args.api_url), poll_interval=args.interval)
    view.mount()
    try:
        print(view.render())
        print()
        print(HELP_TEXT)
        while True:
            try:
                line = input("> ")
            except EOFError:
                break
            output = handle_command(view, line)
            if output is None:
                break
            print(output)
    except KeyboardInterrupt:
        logger.info("Client stopped by user.")
    finally:
        view.unmount()


if __name__ == "__main__":
    main(sys.argv[1:])
