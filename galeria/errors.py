"""Error taxonomy for the gallery tools.

Only usage and template errors abort a run. Every document-mutation step
catches its own errors and reports them as warnings.
"""


class GaleriaError(Exception):
    """Base error for the gallery tools."""
    pass


class UsageError(GaleriaError):
    """Missing or empty required input."""
    pass


class MissingTemplateError(GaleriaError):
    """A required template document does not exist."""
    pass


class TemplateMalformedError(GaleriaError):
    """The template has no recognizable image-array block."""
    pass


class MissingHostDocumentError(GaleriaError):
    """The registry or aggregate document does not exist."""
    pass


class MalformedHostDocumentError(GaleriaError):
    """The expected block was not found inside an existing host document."""
    pass


class DuplicateKeyError(GaleriaError):
    """The access code is already registered."""
    pass


class ExternalToolFailure(GaleriaError):
    """Thumbnail generation failed."""
    pass
