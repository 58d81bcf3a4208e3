# ragparsers/core/processor/docx_helper/docx_constants.py
"""
DOCX constants: XML namespaces and element tags.
"""
from enum import Enum

from docx.oxml.ns import qn

NAMESPACES = {
    'w': 'http://schemas.openxmlformats.org/wordprocessingml/2006/main',
    'r': 'http://schemas.openxmlformats.org/officeDocument/2006/relationships',
    'a': 'http://schemas.openxmlformats.org/drawingml/2006/main',
    'pic': 'http://schemas.openxmlformats.org/drawingml/2006/picture',
    'wp': 'http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing',
    'v': 'urn:schemas-microsoft-com:vml',
}


class ElementType(Enum):
    """Body-level element types"""
    PARAGRAPH = "p"
    TABLE = "tbl"


# Paragraph children
TAG_RUN = qn('w:r')
TAG_HYPERLINK = qn('w:hyperlink')
TAG_DELETED = qn('w:del')
TAG_INSERTED = qn('w:ins')
TAG_SMART_TAG = qn('w:smartTag')

# Run children
TAG_RUN_PROPERTIES = qn('w:rPr')
TAG_TEXT = qn('w:t')
TAG_DELETED_TEXT = qn('w:delText')
TAG_TAB = qn('w:tab')
TAG_BREAK = qn('w:br')

# Attributes
ATTR_VAL = qn('w:val')
ATTR_ID = qn('w:id')
ATTR_AUTHOR = qn('w:author')
ATTR_DATE = qn('w:date')
ATTR_STYLE_ID = qn('w:styleId')
ATTR_TYPE = qn('w:type')
ATTR_REL_ID = qn('r:id')
ATTR_REL_EMBED = qn('r:embed')

# w:val values that switch a toggle property off
FALSE_VALUES = frozenset(['0', 'false', 'off', 'none'])


__all__ = [
    'NAMESPACES',
    'ElementType',
    'TAG_RUN',
    'TAG_HYPERLINK',
    'TAG_DELETED',
    'TAG_INSERTED',
    'TAG_SMART_TAG',
    'TAG_RUN_PROPERTIES',
    'TAG_TEXT',
    'TAG_DELETED_TEXT',
    'TAG_TAB',
    'TAG_BREAK',
    'ATTR_VAL',
    'ATTR_ID',
    'ATTR_AUTHOR',
    'ATTR_DATE',
    'ATTR_STYLE_ID',
    'ATTR_TYPE',
    'ATTR_REL_ID',
    'ATTR_REL_EMBED',
    'FALSE_VALUES',
]
