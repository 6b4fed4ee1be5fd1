"""Domain exceptions."""


class PdfRagError(Exception):
    """Base exception for pdfrag."""

    pass


class ValidationError(PdfRagError):
    """Input rejected before it reaches the retrieval core."""

    pass


class PipelineError(PdfRagError):
    """Document processing failed and the document is marked as failed."""

    pass


class CorruptTextError(PipelineError):
    """Extracted text cannot be processed."""

    pass


class InvalidStatusTransition(PdfRagError):
    """Processing status change not allowed by the state machine."""

    pass


class NoEmbeddingsError(PdfRagError):
    """None of the chunks carries an embedding."""

    pass


class IncomparableVectorsError(PdfRagError):
    """Query and chunk vectors come from different embedding methods."""

    pass


class MalformedResponseError(PdfRagError):
    """Provider returned a response that does not match the request."""

    pass
