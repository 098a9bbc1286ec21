"""
Keep a link to the Notion note at the top of a pull request description.

The link lives in a block owned by the bot:

    <notionbot>

      [Notion Ticket](https://www.notion.so/...)

      <hr/>
    </notionbot>

Merging replaces the first block found in the body (markers matched
case-insensitively, anything in between, across lines) or prepends a new one
when there is none. Text outside the block is never touched, so merging the
same URL twice gives the same body as merging it once.
"""

import re
from urllib.parse import quote

START_MARKER = "<notionbot>"
END_MARKER = "</notionbot>"

BLOCK_TEMPLATE = """<notionbot>

  [Notion Ticket]({url})

  <hr/>
</notionbot>
"""

_START_RE = re.compile(re.escape(START_MARKER), re.IGNORECASE)
_END_RE = re.compile(re.escape(END_MARKER), re.IGNORECASE)
# One line break after the end marker belongs to the block
_TRAILING_NEWLINE_RE = re.compile(r"\r?\n")
# Everything a URL may carry except angle brackets, quotes and whitespace
_URL_SAFE = ":/?#[]@!$&'()*+,;=%~"


def build_block(url: str) -> str:
    """Return the managed block linking to url.

    Angle brackets in url are percent-encoded so it cannot close the block.
    """
    return BLOCK_TEMPLATE.format(url=quote(url, safe=_URL_SAFE))


def find_block(body: str) -> tuple[int, int] | None:
    """Return (start, end) of the first managed block in body, or None.

    The block runs from the first start marker to the nearest end marker
    after it. A start marker with no end marker after it is not a block.
    """
    start = _START_RE.search(body)
    if start is None:
        return None
    end = _END_RE.search(body, start.end())
    if end is None:
        return None
    stop = end.end()
    newline = _TRAILING_NEWLINE_RE.match(body, stop)
    if newline is not None:
        stop = newline.end()
    return start.start(), stop


def merge_description(existing_body: str | None, tracking_url: str) -> str:
    """Return existing_body with exactly one managed block pointing at
    tracking_url (replaced in place, or prepended)."""
    body = existing_body or ""
    block = build_block(tracking_url)
    span = find_block(body)
    if span is None:
        return block + body
    start, stop = span
    return body[:start] + block + body[stop:]
