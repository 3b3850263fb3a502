"""Per-file error taxonomy for the render pipeline"""

from typing import Optional


class RenderError(Exception):
    """Base for failures that drop a single file from the pipeline."""

    def __init__(self, message: str, file_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.file_name = file_name

    def __str__(self) -> str:
        if self.file_name:
            return f"{self.file_name}: {self.message}"
        return self.message


class StreamingUnsupportedError(RenderError):
    """Contents arrived as an unread stream instead of bytes."""


class ConfigDataError(RenderError):
    """The extra_data JSON file is missing, unreadable, or malformed."""


class FrontMatterError(RenderError):
    """The front-matter block is not valid YAML or not a mapping."""


class LayoutRequiredError(RenderError):
    """Front-matter was given but no layout was declared anywhere."""


class TemplateError(RenderError):
    """The template engine failed to compile or render the page."""
