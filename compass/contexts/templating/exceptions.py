"""Custom exceptions for the templating context."""

from typing import Any, Optional


class InvalidResumeStructureError(ValueError):
    """
    Exception raised when resume data doesn't conform to the section schema.

    Raised for unknown section types and for section content that is not a
    mapping (or entries that are not mappings).

    Attributes:
        message: Error description
        section_type: Type of the offending section, if known
        section_id: Id of the offending section, if known
        content: The content that failed to load
    """

    def __init__(
        self,
        message: str,
        section_type: Optional[str] = None,
        section_id: Optional[str] = None,
        content: Any = None,
    ):
        self.message = message
        self.section_type = section_type
        self.section_id = section_id
        self.content = content

        parts = [message]

        if section_type or section_id:
            parts.append(f"\nSection: {section_id or '?'} (type: {section_type or '?'})")

        if content is not None:
            snippet = repr(content)
            snippet = snippet[:200] + "..." if len(snippet) > 200 else snippet
            parts.append(f"\nActual content:\n{snippet}")

        super().__init__("\n".join(parts))
