"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MalformedEntryError(DomainException):
    """Survey entry has an unparsable timestamp or an unknown enum value"""

    pass


class StoreError(DomainException):
    """Survey entry store failed to append or list entries"""

    pass


class SummarizationError(DomainException):
    """AI summarization service returned an error or an unusable response"""

    pass
