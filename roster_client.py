"""Crew Roster API client.

A thin wrapper around the roster HTTP API built on ``requests``, plus
the roster export used by the browser client's "Export" buttons.

The client exposes one method per API operation:

* :meth:`RosterAPI.list_rowers` / :meth:`RosterAPI.get_rower` /
  :meth:`RosterAPI.create_rower` – manage rowers (with an optional photo).
* :meth:`RosterAPI.list_crews` / :meth:`RosterAPI.get_crew` /
  :meth:`RosterAPI.create_crew` – manage crews.
* :meth:`RosterAPI.add_rower_to_crew` / :meth:`RosterAPI.remove_rower_from_crew`
  – change crew membership.
* :meth:`RosterAPI.move_rower` / :meth:`RosterAPI.unassign_rower` – the
  drag-and-drop moves of the browser UI expressed as membership changes.
* :meth:`RosterAPI.reset` – restore the seed data (test servers only).

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is empty and ``error`` is a dictionary with
keys ``status_code`` and ``message``.

:func:`fetch_roster` collects every crew with its rowers, and
:func:`export_txt` / :func:`export_csv` render such a roster.  Run the
module as a script to export from a running server::

    python roster_client.py --base-url http://localhost:3000 export --format csv -o crews.csv
"""

from __future__ import annotations

import argparse
import csv
import io
import logging
import mimetypes
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]

CSV_HEADER = ["CrewName", "CrewID", "RowerName", "RowerID", "2KTime"]


class RosterAPI:
    """Client for the crew roster API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any | None = None,
        data: Dict[str, Any] | None = None,
        files: Dict[str, Any] | None = None,
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``.  ``data`` holds the parsed JSON
            response on success.  On failure ``data`` is ``None`` and
            ``error`` describes the problem.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                data=data,
                files=files,
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
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Rower operations
    # ------------------------------------------------------------------
    def list_rowers(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/rowers")
        if error:
            return [], error
        return data or [], None

    def get_rower(self, rower_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/rowers/{rower_id}")

    def create_rower(
        self,
        name: str,
        *,
        height: Optional[float] = None,
        weight: Optional[float] = None,
        two_k_time: Optional[str] = None,
        is_ill: bool = False,
        photo_path: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a rower.

        Fields are sent as a form, the same way the browser client does;
        with ``photo_path`` the form becomes multipart.  Photos must be
        JPEG or PNG and at most 5 MiB, the server rejects anything else.
        """
        form: Dict[str, Any] = {"name": name, "isIll": "true" if is_ill else "false"}
        if height is not None:
            form["height"] = str(height)
        if weight is not None:
            form["weight"] = str(weight)
        if two_k_time is not None:
            form["twoKTime"] = two_k_time

        if not photo_path:
            return self._request("POST", "/rowers", data=form)

        content_type = mimetypes.guess_type(photo_path)[0] or "application/octet-stream"
        with open(photo_path, "rb") as fh:
            files = {"photo": (os.path.basename(photo_path), fh, content_type)}
            return self._request("POST", "/rowers", data=form, files=files)

    # ------------------------------------------------------------------
    # Crew operations
    # ------------------------------------------------------------------
    def list_crews(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/crews")
        if error:
            return [], error
        return data or [], None

    def get_crew(self, crew_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/crews/{crew_id}")

    def create_crew(self, name: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/crews", json_body={"name": name})

    def add_rower_to_crew(self, crew_id: int, rower_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", f"/crews/{crew_id}/addRower", json_body={"rowerId": rower_id})

    def remove_rower_from_crew(self, crew_id: int, rower_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", f"/crews/{crew_id}/removeRower", json_body={"rowerId": rower_id})

    # ------------------------------------------------------------------
    # Drag-and-drop moves
    # ------------------------------------------------------------------
    def move_rower(
        self,
        rower_id: int,
        to_crew_id: int,
        from_crew_id: Optional[int] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Move a rower into ``to_crew_id``, leaving ``from_crew_id`` first.

        The server allows a rower to be in several crews; keeping a rower
        in one crew at a time is up to the caller, which is why the
        source crew has to be named explicitly.  Returns the target crew.
        """
        if from_crew_id is not None and from_crew_id != to_crew_id:
            _, error = self.remove_rower_from_crew(from_crew_id, rower_id)
            if error:
                return None, error
        return self.add_rower_to_crew(to_crew_id, rower_id)

    def unassign_rower(self, rower_id: int) -> Tuple[List[int], Optional[Error]]:
        """Remove a rower from every crew that lists it.

        Returns the ids of the crews the rower was removed from.
        """
        crews, error = self.list_crews()
        if error:
            return [], error
        removed: List[int] = []
        for summary in crews:
            crew, error = self.get_crew(summary["id"])
            if error:
                return removed, error
            if rower_id in crew.get("rowerIds", []):
                _, error = self.remove_rower_from_crew(summary["id"], rower_id)
                if error:
                    return removed, error
                removed.append(summary["id"])
        return removed, None

    # ------------------------------------------------------------------
    # Test support
    # ------------------------------------------------------------------
    def reset(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/test/reset")


# ----------------------------------------------------------------------
# Roster export
# ----------------------------------------------------------------------
def fetch_roster(api: RosterAPI) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
    """Collect every crew together with the full records of its rowers.

    Each entry is ``{"id", "name", "rowers": [<rower record>, ...]}`` with
    rowers in assignment order.  Rowers that can no longer be fetched
    are skipped.
    """
    crews, error = api.list_crews()
    if error:
        return [], error
    rower_cache: Dict[int, Optional[Dict[str, Any]]] = {}
    roster: List[Dict[str, Any]] = []
    for summary in crews:
        crew, error = api.get_crew(summary["id"])
        if error:
            return [], error
        rowers = []
        for rower_id in crew.get("rowerIds", []):
            if rower_id not in rower_cache:
                rower, rower_error = api.get_rower(rower_id)
                if rower_error:
                    logger.warning("Skipping rower %s of crew %s: %s", rower_id, summary["id"], rower_error["message"])
                rower_cache[rower_id] = rower
            if rower_cache[rower_id] is not None:
                rowers.append(rower_cache[rower_id])
        roster.append({"id": crew["id"], "name": crew["name"], "rowers": rowers})
    return roster, None


def export_txt(roster: List[Dict[str, Any]]) -> str:
    """Render a roster as the plain-text crew list."""
    lines = ["Crew List", ""]
    for crew in roster:
        lines.append(f"Crew: {crew['name']} (ID: {crew['id']})")
        if not crew["rowers"]:
            lines.append("  No Rowers")
        for rower in crew["rowers"]:
            lines.append(f"  Rower: {rower['name']}, ID: {rower['id']}, 2K: {rower.get('twoKTime', '')}")
        lines.append("")
    return "\n".join(lines) + "\n"


def export_csv(roster: List[Dict[str, Any]]) -> str:
    """Render a roster as CSV, one row per crew member.

    A crew without members still gets one row with empty rower columns.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for crew in roster:
        if not crew["rowers"]:
            writer.writerow([crew["name"], crew["id"], "", "", ""])
            continue
        for rower in crew["rowers"]:
            writer.writerow([crew["name"], crew["id"], rower["name"], rower["id"], rower.get("twoKTime", "")])
    return buffer.getvalue()


EXPORTERS = {"txt": export_txt, "csv": export_csv}


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Crew roster API client.")
    ap.add_argument("--base-url", default=os.getenv("ROSTER_API_URL", "http://localhost:3000"), help="Server base URL")
    sub = ap.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", help="Export all crews with their rowers")
    export.add_argument("--format", choices=sorted(EXPORTERS), default="txt", help="Output format")
    export.add_argument("-o", "--output", help="Write to this file instead of stdout")

    sub.add_parser("reset", help="Restore the seed data (server must run with ENVIRONMENT=test)")

    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    api = RosterAPI(base_url=args.base_url)

    if args.command == "reset":
        result, error = api.reset()
        if error:
            print(f"[!] Reset failed: {error['message']}", file=sys.stderr)
            return 1
        print(f"[+] {result['message']}")
        return 0

    roster, error = fetch_roster(api)
    if error:
        print(f"[!] Export failed: {error['message']}", file=sys.stderr)
        return 1
    content = EXPORTERS[args.format](roster)
    if args.output:
        with open(args.output, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        print(f"[+] Wrote {len(roster)} crews to {args.output}")
    else:
        sys.stdout.write(content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
