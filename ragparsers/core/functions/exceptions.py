# ragparsers/core/functions/exceptions.py
"""
Exceptions raised by document handlers.
"""


class DocumentStructureError(RuntimeError):
    """
    The document is missing a part that every later step depends on
    (main document part, document body, unreadable container).

    The whole conversion fails; no partial Markdown is returned.
    """


__all__ = ["DocumentStructureError"]
