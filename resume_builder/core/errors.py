"""
Exception taxonomy for the resume builder service.

The structure extractor itself never raises; these cover the collaborators
around it (document-to-text conversion and variant persistence).
"""


class ResumeBuilderError(Exception):
    """Base class for all service errors."""


class DocumentExtractionError(ResumeBuilderError):
    """Uploaded document could not be converted to plain text."""

    def __init__(self, fmt: str, message: str):
        self.format = fmt
        super().__init__(message)


class UnsupportedFormatError(ResumeBuilderError):
    pass


class InvalidVariantNameError(ResumeBuilderError):
    pass


class VariantNotFoundError(ResumeBuilderError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variant not found: {name}")


class VariantExistsError(ResumeBuilderError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"A variant with this name already exists: {name}")


class LastVariantError(ResumeBuilderError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot delete the last remaining variant: {name}")
