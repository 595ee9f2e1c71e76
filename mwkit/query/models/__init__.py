"""Data models.

Response documents are navigated through pydantic envelope models
(``ResponseEnvelope``); entities themselves stay plain dicts, with
``Revision`` adding the page back-reference for located revisions.
"""

from .response import ApiWarning, QueryBlock, ResponseEnvelope, TitleMapping
from .revision import Revision, page_of_revision, page_without_revisions

__all__ = [
    "ApiWarning",
    "QueryBlock",
    "ResponseEnvelope",
    "TitleMapping",
    "Revision",
    "page_of_revision",
    "page_without_revisions",
]
