# ragparsers/core/processor/docx_helper/docx_paragraph.py
"""
DOCX Paragraph processing

Renders the inline content of a paragraph as Markdown.

Paragraph children are classified into a small set of variants, each with
its own renderer:

    | Variant    | Source            | Markdown                                  |
    |------------|-------------------|-------------------------------------------|
    | StyledRun  | w:r with w:rPr    | **bold**, *italic*, spaces kept outside   |
    | PlainText  | w:r without w:rPr | text as-is                                |
    | Hyperlink  | w:hyperlink       | [text](url) external, [text] otherwise    |
    | DeletedRun | w:del             | ~~(revision : author - date : text)~~     |

Inserted revisions (w:ins) and smart tags are transparent: their runs are
rendered as if they were direct children of the paragraph. Deleted runs are
rendered only when revision content is requested.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Mapping, Optional, Union

from ragparsers.core.processor.docx_helper.docx_constants import (
    ATTR_AUTHOR,
    ATTR_DATE,
    ATTR_REL_ID,
    ATTR_TYPE,
    ATTR_VAL,
    FALSE_VALUES,
    NAMESPACES,
    TAG_BREAK,
    TAG_DELETED,
    TAG_DELETED_TEXT,
    TAG_HYPERLINK,
    TAG_INSERTED,
    TAG_RUN,
    TAG_RUN_PROPERTIES,
    TAG_SMART_TAG,
    TAG_TAB,
    TAG_TEXT,
)

logger = logging.getLogger("document-processor")

_TRANSPARENT_TAGS = (TAG_INSERTED, TAG_SMART_TAG)


# ============================================================================
# Paragraph child variants
# ============================================================================

@dataclass(frozen=True)
class StyledRun:
    """Run carrying run properties"""
    element: object = field(repr=False)
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True)
class PlainText:
    """Run without run properties"""
    element: object = field(repr=False)


@dataclass(frozen=True)
class Hyperlink:
    """Hyperlink wrapping one or more runs"""
    element: object = field(repr=False)
    rel_id: Optional[str] = None


@dataclass(frozen=True)
class DeletedRun:
    """Tracked deletion"""
    element: object = field(repr=False)
    author: str = ""
    date: str = ""


ParagraphChild = Union[StyledRun, PlainText, Hyperlink, DeletedRun]


@dataclass(frozen=True)
class RunContext:
    """
    Document level data needed to render runs.

    Attributes:
        hyperlinks: Relationship id -> external URL
        extract_revision_content: Render deleted runs
    """
    hyperlinks: Mapping[str, str] = field(default_factory=dict)
    extract_revision_content: bool = False


# ============================================================================
# Classification
# ============================================================================

def _toggle_on(rpr, tag: str) -> bool:
    elem = rpr.find(tag, NAMESPACES)
    if elem is None:
        return False
    value = elem.get(ATTR_VAL)
    return value is None or value.lower() not in FALSE_VALUES


def classify_child(elem) -> Optional[ParagraphChild]:
    """
    Classify one paragraph child.

    Returns:
        ParagraphChild, or None for elements without inline text
        (paragraph properties, bookmarks, comment anchors, ...)
    """
    tag = elem.tag

    if tag == TAG_RUN:
        rpr = elem.find(TAG_RUN_PROPERTIES)
        if rpr is None:
            return PlainText(elem)
        return StyledRun(
            elem,
            bold=_toggle_on(rpr, 'w:b'),
            italic=_toggle_on(rpr, 'w:i'),
        )

    if tag == TAG_HYPERLINK:
        return Hyperlink(elem, rel_id=elem.get(ATTR_REL_ID))

    if tag == TAG_DELETED:
        return DeletedRun(
            elem,
            author=elem.get(ATTR_AUTHOR) or "",
            date=elem.get(ATTR_DATE) or "",
        )

    return None


def iter_paragraph_children(para_elem) -> Iterator[ParagraphChild]:
    """Classified children of a paragraph, in document order."""
    for child in para_elem:
        if child.tag in _TRANSPARENT_TAGS:
            yield from iter_paragraph_children(child)
            continue

        classified = classify_child(child)
        if classified is not None:
            yield classified


# ============================================================================
# Text helpers
# ============================================================================

def run_text(run_elem, deleted: bool = False) -> str:
    """Text of one run: text nodes, tabs and line breaks."""
    text_tag = TAG_DELETED_TEXT if deleted else TAG_TEXT
    parts = []

    for child in run_elem:
        if child.tag == text_tag:
            parts.append(child.text or "")
        elif child.tag == TAG_TAB:
            parts.append("\t")
        elif child.tag == TAG_BREAK and child.get(ATTR_TYPE) in (None, "textWrapping"):
            parts.append("\n")

    return "".join(parts)


def _runs_text(elem, deleted: bool = False) -> str:
    return "".join(run_text(run, deleted) for run in elem.iter(TAG_RUN))


# ============================================================================
# Rendering
# ============================================================================

def _render_styled_run(child: StyledRun, ctx: RunContext) -> str:
    text = run_text(child.element)
    marker = ("**" if child.bold else "") + ("*" if child.italic else "")

    core = text.strip(" ")
    if not marker or not core:
        return text

    leading = " " if text.startswith(" ") else ""
    trailing = " " if text.endswith(" ") else ""
    return f"{leading}{marker}{core}{marker}{trailing}"


def _render_plain_text(child: PlainText, ctx: RunContext) -> str:
    return run_text(child.element)


def _render_hyperlink(child: Hyperlink, ctx: RunContext) -> str:
    text = _runs_text(child.element)
    if not text:
        return ""

    url = ctx.hyperlinks.get(child.rel_id) if child.rel_id else None
    if url:
        return f"[{text}]({url})"
    return f"[{text}]"


def _render_deleted_run(child: DeletedRun, ctx: RunContext) -> str:
    if not ctx.extract_revision_content:
        return ""
    text = _runs_text(child.element, deleted=True).strip()
    return f"~~(revision : {child.author} - {child.date} : {text})~~"


_RENDERERS: Dict[type, Callable[..., str]] = {
    StyledRun: _render_styled_run,
    PlainText: _render_plain_text,
    Hyperlink: _render_hyperlink,
    DeletedRun: _render_deleted_run,
}


def render_child(child: ParagraphChild, ctx: RunContext) -> str:
    """Render one classified paragraph child."""
    return _RENDERERS[type(child)](child, ctx)


def render_paragraph_text(para_elem, ctx: RunContext) -> str:
    """
    Markdown inline text of a paragraph.

    Args:
        para_elem: w:p element
        ctx: RunContext

    Returns:
        Rendered text (may be empty)
    """
    return "".join(render_child(child, ctx) for child in iter_paragraph_children(para_elem))


def paragraph_plain_text(para_elem) -> str:
    """Text of a paragraph without decoration or deleted content."""
    parts = []
    for child in iter_paragraph_children(para_elem):
        if isinstance(child, (StyledRun, PlainText)):
            parts.append(run_text(child.element))
        elif isinstance(child, Hyperlink):
            parts.append(_runs_text(child.element))
    return "".join(parts)


__all__ = [
    'StyledRun',
    'PlainText',
    'Hyperlink',
    'DeletedRun',
    'ParagraphChild',
    'RunContext',
    'classify_child',
    'iter_paragraph_children',
    'run_text',
    'render_child',
    'render_paragraph_text',
    'paragraph_plain_text',
]
