"""notionbot: link pull requests and Notion notes from CI."""

__version__ = "0.1.0"
