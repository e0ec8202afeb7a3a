"""Exception taxonomy for document processing and payments.

Data-quality problems in LLM output never raise; these cover failures the
caller has to report back to the user.
"""


class ContractObligationError(Exception):
    """Base class for application errors."""

    pass


class DocumentExtractionError(ContractObligationError):
    """Text could not be produced from an uploaded document."""

    pass


class UnsupportedDocumentError(DocumentExtractionError):
    """The uploaded file type is not one we can extract text from."""

    pass


class InvalidDocumentError(DocumentExtractionError):
    """The file claims a supported type but its content does not match.

    Examples: a "PDF" without the %PDF header, a corrupted DOCX archive.
    """

    pass


class ObligationAnalysisError(ContractObligationError):
    """The LLM call failed or returned something we could not parse."""

    pass


class PaymentGatewayError(ContractObligationError):
    """The payment provider rejected a request or was unreachable."""

    def __init__(self, message: str, status_code: int = 502, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}
