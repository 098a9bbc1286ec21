"""Notion API adapter.

Raw endpoint calls (pages, database query, database retrieve) plus the note
level operations the bot needs: lookup by branch identifier and the two
property patches (PR link and tech status).
"""

import logging
from typing import Any, Dict, List

import requests

from notionbot.adapters.base import NoteNotFoundError, TrackerAdapter, TrackerError
from notionbot.config import NotionConfig
from notionbot.models import Found, Note, NoteLookup, NotFound

logger = logging.getLogger("notionbot.adapters.notion")


def _plain_text(rich_text: List[Dict[str, Any]] | None) -> str:
    if not rich_text:
        return ""
    return rich_text[0].get("plain_text") or ""


def _select_name(prop: Dict[str, Any] | None) -> str | None:
    select = (prop or {}).get("select") or {}
    return select.get("name")


def _formula_string(prop: Dict[str, Any] | None) -> str | None:
    formula = (prop or {}).get("formula") or {}
    return formula.get("string")


def _note_from_api(data: Dict[str, Any], config: NotionConfig) -> Note:
    if data.get("object") != "page":
        raise NoteNotFoundError(f"Not a page: {data.get('object')!r}")
    props = data.get("properties") or {}
    title_prop = props.get(config.title_property) or {}
    return Note(
        id=data["id"],
        title=_plain_text(title_prop.get("title")),
        url=data.get("url", ""),
        priority=_select_name(props.get(config.priority_property)),
        status=_select_name(props.get(config.status_property)),
        branch_id=_formula_string(props.get(config.branch_property)),
    )


class NotionAdapter(TrackerAdapter):
    """Notion API implementation over a single database."""

    def __init__(self, secret: str, config: NotionConfig) -> None:
        if not config.database_id:
            raise ValueError("Notion database id is required")
        self._config = config
        self._api_url = config.api_url.rstrip("/")
        self._database_id = config.database_id
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"Bearer {secret}"
        self._session.headers["Notion-Version"] = config.version
        self._session.headers["Content-Type"] = "application/json"

    def _request(
        self,
        method: str,
        path: str,
        json: Dict[str, Any] | None = None,
    ) -> Dict[str, Any]:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(method, url, json=json, timeout=self._config.timeout)
        except requests.RequestException as e:
            raise TrackerError(f"{method} {path} failed: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except ValueError:
                pass
            raise TrackerError(f"{resp.status_code}: {msg}", status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise TrackerError(f"{method} {path}: invalid JSON response") from e

    # Raw endpoints

    def get_page(self, page_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/pages/{page_id}")

    def query_database(self, query: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", f"/databases/{self._database_id}/query", json=query)

    def update_page(self, page_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/pages/{page_id}", json={"properties": properties})

    def retrieve_database(self) -> Dict[str, Any]:
        return self._request("GET", f"/databases/{self._database_id}")

    # Notes

    def get_note(self, note_id: str) -> Note:
        try:
            data = self.get_page(note_id)
        except TrackerError as e:
            if e.status_code == 404:
                raise NoteNotFoundError(f"Not found: note {note_id}", status_code=404) from e
            raise
        return _note_from_api(data, self._config)

    def get_database(self) -> Dict[str, Any]:
        return self.retrieve_database()

    def find_by_branch_id(self, branch_id: str) -> NoteLookup:
        query = {
            "filter": {
                "property": self._config.branch_property,
                "formula": {"string": {"equals": branch_id}},
            }
        }
        results = self.query_database(query).get("results") or []
        if not results:
            return NotFound(branch_id)
        return Found(_note_from_api(results[0], self._config))

    def set_pr_url(self, note_id: str, url: str) -> Dict[str, Any]:
        properties = {self._config.pr_url_property: {"url": url}}
        return self.update_page(note_id, properties)

    def set_status(self, note_id: str, status: str) -> Dict[str, Any]:
        properties = {self._config.status_property: {"select": {"name": status}}}
        return self.update_page(note_id, properties)
