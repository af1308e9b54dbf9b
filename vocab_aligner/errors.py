"""Exception types raised at the boundaries of the aligner.

Stage functions are total over well-formed inputs; these are the only
conditions surfaced as errors.
"""


class AlignerError(Exception):
    """Base class for all vocab_aligner errors"""

    pass


class ConfigurationError(AlignerError, ValueError):
    """Raised for inconsistent or out-of-range run configuration.

    Covers thresholds and weights outside [0, 1], unknown policy, step or
    strategy names, and enabled steps without a collaborator.
    """

    pass


class DegenerateInputError(AlignerError, ValueError):
    """Raised when a statistic is undefined for its input (e.g. the sample
    variance of fewer than two values)."""

    pass


class OracleUnavailable(AlignerError):
    """Raised when the oracle cannot answer (timeout or responder failure)"""

    def __init__(self, message: str, source_id: str = None, target_id: str = None):
        self.source_id = source_id
        self.target_id = target_id
        super().__init__(message)


class AlignmentFormatError(AlignerError, ValueError):
    """Raised for malformed rows in a serialized alignment"""

    def __init__(self, path: str, line_number: int, reason: str):
        self.path = path
        self.line_number = line_number
        super().__init__(f"{path}:{line_number}: {reason}")
