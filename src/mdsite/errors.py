"""Build error taxonomy: every error aborts the whole site build"""

from pathlib import Path
from typing import Optional, Union


class BuildError(Exception):
    """Base class for all build failures. `path` names the offending document once known."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class MetadataParseError(BuildError):
    """Frontmatter block is malformed or fails validation."""


class RawHtmlDisabledError(BuildError):
    """Markdown parser preset does not allow raw HTML passthrough."""


class MathRenderError(BuildError):
    """A math span or block could not be converted."""

    def __init__(self, snippet: str, cause: Union[Exception, str, None] = None):
        detail = ""
        if cause is not None:
            detail = f": {cause}" if str(cause) else f": {type(cause).__name__}"
        super().__init__(f"cannot render math {snippet!r}{detail}")
        self.snippet = snippet


class MissingHrefError(BuildError):
    """Anchor element without a usable href."""


class UnknownLanguageError(BuildError):
    """Code block declares no language."""


class HighlightError(BuildError):
    """Code block language is not supported by the highlighter."""


class MissingTitleError(BuildError):
    """Document has no level-1 heading."""


class MissingPublishDateError(BuildError):
    """Blog post frontmatter has no publish_date."""


class NonMarkdownEntryError(BuildError):
    """Blog directory holds something other than a markdown file."""
