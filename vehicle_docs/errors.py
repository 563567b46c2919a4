"""Exceptions raised by the document engine."""


class DocumentError(Exception):
    """Base class for every error raised by vehicle_docs."""


class ConfigurationError(DocumentError):
    """Style, company or font configuration is unusable.

    Raised while building a LayoutEngine, before anything is drawn. Generation
    is aborted; nothing is retried.
    """


class DocumentValidationError(DocumentError):
    """A bundle failed strict validation before finalizing a legal document."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems) or "invalid document data")
