"""
Text segmentation strategies for job descriptions.

The JD analyzer never looks for section boundaries itself; it asks a
TextSegmenter for the requirements and responsibilities blocks and for the
items inside a block. Two strategies ship:

- RegexSegmenter: lookahead-bounded inline blocks ("Requirements: ... About").
  Works on single-paragraph postings. This is the default.
- MarkdownSegmenter: header-based sections (**Bold**, # Hash, "Header:" lines)
  classified by archetype. Falls back to RegexSegmenter when the text has no
  recognizable headers.
"""

import re
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from compass.contexts.intake.extraction_patterns import RESPONSIBILITY_DELIMITERS
from compass.contexts.intake.section_patterns import (
    BULLET_LINE,
    InlineBlockPatterns,
    MarkdownHeaderPatterns,
    match_section_archetype,
)


class TextSegmenter(ABC):
    """Locates the blocks of a job description that the analyzer mines."""

    @abstractmethod
    def requirements_block(self, text: str) -> Optional[str]:
        """Text of the requirements section, or None if there is none."""

    @abstractmethod
    def responsibilities_block(self, text: str) -> Optional[str]:
        """Text of the responsibilities section, or None if there is none."""

    def split_items(self, block: str) -> List[str]:
        """Split a block into stripped candidate items on bullet/newline delimiters."""
        return [item.strip() for item in RESPONSIBILITY_DELIMITERS.split(block)]


class RegexSegmenter(TextSegmenter):
    """Inline heading-word segmentation for unstructured text."""

    def requirements_block(self, text: str) -> Optional[str]:
        match = InlineBlockPatterns.REQUIREMENTS.search(text)
        return match.group(1) if match else None

    def responsibilities_block(self, text: str) -> Optional[str]:
        match = InlineBlockPatterns.RESPONSIBILITIES.search(text)
        return match.group(1) if match else None


def extract_sections(text: str) -> Dict[str, str]:
    """
    Split markdown text into {section name: content}.

    Sections are opened by a bold header, a hash header or a short "Name:" line.
    Text before the first header is dropped. Repeated section names are merged.

    Args:
        text: Job description markdown

    Returns:
        Ordered dict of section name to stripped content
    """
    header_patterns = (
        MarkdownHeaderPatterns.BOLD_HEADER,
        MarkdownHeaderPatterns.HASH_HEADER,
        MarkdownHeaderPatterns.COLON_HEADER,
    )

    sections: Dict[str, List[str]] = {}
    current_section = None

    for line in text.split("\n"):
        stripped = line.strip()

        header, remainder = _match_header(stripped, header_patterns)
        if header is not None:
            current_section = header
            sections.setdefault(current_section, [])
            if remainder:
                sections[current_section].append(remainder)
        elif current_section is not None:
            sections[current_section].append(line)

    return {name: "\n".join(lines).strip() for name, lines in sections.items()}


def _match_header(line: str, patterns: Tuple[str, ...]) -> Tuple[Optional[str], str]:
    """Return (header name, text after the header on the same line) or (None, "")."""
    for pattern in patterns:
        match = re.match(pattern, line)
        if match:
            return match.group(1).strip(), line[match.end() :].strip()
    return None, ""


class MarkdownSegmenter(TextSegmenter):
    """
    Header-based segmentation for structured postings.

    Attributes:
        fallback: Segmenter used when no header of the wanted archetype exists
    """

    def __init__(self, fallback: Optional[TextSegmenter] = None):
        self.fallback = fallback or RegexSegmenter()

    def _blocks_for(self, text: str, archetype: str) -> Optional[str]:
        sections = extract_sections(text)
        blocks = [
            content
            for name, content in sections.items()
            if match_section_archetype(name) == archetype and content
        ]
        return "\n".join(blocks) if blocks else None

    def requirements_block(self, text: str) -> Optional[str]:
        block = self._blocks_for(text, "required_qualifications")
        return block if block is not None else self.fallback.requirements_block(text)

    def responsibilities_block(self, text: str) -> Optional[str]:
        block = self._blocks_for(text, "responsibilities")
        return block if block is not None else self.fallback.responsibilities_block(text)

    def split_items(self, block: str) -> List[str]:
        """
        Prefer markdown bullets; fall back to delimiter splitting when the
        block has no bullet lines.
        """
        bullets = []
        for line in block.split("\n"):
            match = BULLET_LINE.match(line.strip())
            if match and match.group(1).strip():
                bullets.append(match.group(1).strip())
        return bullets if bullets else super().split_items(block)
