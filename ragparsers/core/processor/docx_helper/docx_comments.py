# ragparsers/core/processor/docx_helper/docx_comments.py
"""
DOCX comment extraction

Comments are numbered in order of first reference. A paragraph referencing
comments gets "(n)" markers after its text and one quote line per comment:

    Some text(1)

    > (1) : Jane Doe (2024-05-01) : Please check this

The document ends with a summary of all comments:

    > Comments
    > (1) Please check this
"""
import logging
from dataclasses import dataclass
from typing import Dict, List

from docx.document import Document as DocxDocument
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from lxml import etree

from ragparsers.core.processor.docx_helper.docx_constants import (
    ATTR_AUTHOR,
    ATTR_DATE,
    ATTR_ID,
    NAMESPACES,
    TAG_TEXT,
)

logger = logging.getLogger("document-processor")


@dataclass(frozen=True)
class CommentInfo:
    """One comment of the comments part"""
    comment_id: str
    text: str
    author: str = ""
    date: str = ""


@dataclass(frozen=True)
class CommentRef:
    """A numbered comment reference"""
    index: int
    info: CommentInfo


def load_comments(doc: DocxDocument) -> Dict[str, CommentInfo]:
    """
    Read the comments part of a document.

    Args:
        doc: python-docx Document

    Returns:
        comment id -> CommentInfo, empty when the document has no comments
    """
    comments: Dict[str, CommentInfo] = {}

    for rel in doc.part.rels.values():
        if rel.reltype != RT.COMMENTS or rel.is_external:
            continue

        root = etree.fromstring(rel.target_part.blob)
        for comment_elem in root.findall('w:comment', NAMESPACES):
            comment_id = comment_elem.get(ATTR_ID)
            if comment_id is None:
                continue
            text = "".join(t.text or "" for t in comment_elem.iter(TAG_TEXT))
            comments[comment_id] = CommentInfo(
                comment_id=comment_id,
                text=text,
                author=comment_elem.get(ATTR_AUTHOR) or "",
                date=(comment_elem.get(ATTR_DATE) or "")[:10],
            )

    if comments:
        logger.debug(f"Loaded {len(comments)} DOCX comments")
    return comments


class CommentTracker:
    """
    Numbers comments in order of first reference within one document.

    Usage:
        tracker = CommentTracker(load_comments(doc))
        refs = tracker.references(para_elem)
        ...
        summary = tracker.format_summary()
    """

    def __init__(self, comments: Dict[str, CommentInfo]):
        self._comments = comments
        self._numbered: Dict[str, CommentRef] = {}

    def references(self, para_elem) -> List[CommentRef]:
        """Numbered comments anchored in a paragraph, in anchor order."""
        refs: List[CommentRef] = []

        for anchor in para_elem.iterfind('.//w:commentRangeStart', NAMESPACES):
            comment_id = anchor.get(ATTR_ID)
            ref = self._numbered.get(comment_id)
            if ref is None:
                info = self._comments.get(comment_id)
                if info is None:
                    logger.debug(f"Comment anchor {comment_id} has no comment")
                    continue
                ref = CommentRef(index=len(self._numbered) + 1, info=info)
                self._numbered[comment_id] = ref
            refs.append(ref)

        return refs

    def format_summary(self) -> str:
        """Closing summary block, "" when no comment was referenced."""
        if not self._numbered:
            return ""

        lines = ["> Comments"]
        for ref in sorted(self._numbered.values(), key=lambda r: r.index):
            lines.append(f"> ({ref.index}) {ref.info.text}")
        return "\n".join(lines) + "\n"


def format_markers(refs: List[CommentRef]) -> str:
    """Inline markers: "(1)(2)"."""
    return "".join(f"({ref.index})" for ref in refs)


def format_comment_line(ref: CommentRef) -> str:
    """Quote line shown under the commented paragraph."""
    info = ref.info
    return f"> ({ref.index}) : {info.author} ({info.date}) : {info.text}"


__all__ = [
    'CommentInfo',
    'CommentRef',
    'CommentTracker',
    'load_comments',
    'format_markers',
    'format_comment_line',
]
