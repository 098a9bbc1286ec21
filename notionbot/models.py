"""Data models for Notion notes, pull requests and branch lookups."""


class Note:
    """Notion page tracking one unit of work."""

    def __init__(
        self,
        id: str,
        title: str,
        url: str,
        priority: str | None = None,
        status: str | None = None,
        branch_id: str | None = None,
    ) -> None:
        self.id = id
        self.title = title or ""
        self.url = url
        self.priority = priority
        self.status = status
        self.branch_id = branch_id


class PR:
    """Pull request."""

    def __init__(
        self,
        number: int,
        title: str,
        body: str,
        head_branch: str,
        base_branch: str,
        state: str,
        html_url: str | None = None,
    ) -> None:
        self.number = number
        self.title = title
        self.body = body or ""
        self.head_branch = head_branch
        self.base_branch = base_branch
        self.state = state
        self.html_url = html_url


class Found:
    """Branch lookup matched a note."""

    def __init__(self, note: Note) -> None:
        self.note = note

    def __repr__(self) -> str:
        return f"Found(note={self.note.id!r})"


class NotFound:
    """Branch lookup matched nothing."""

    def __init__(self, branch_id: str) -> None:
        self.branch_id = branch_id

    def __repr__(self) -> str:
        return f"NotFound(branch_id={self.branch_id!r})"


NoteLookup = Found | NotFound
