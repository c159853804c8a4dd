class AmpsParamError(Exception):
    """Base class for exceptions in the ampsparam package."""

    pass


class NotSupportedError(AmpsParamError):
    """Exception raised for features that are not yet implemented."""

    pass


class InputGenerationError(AmpsParamError):
    """Exception raised when a run configuration cannot be written as AMPS_PARAM.in text."""

    pass


class ConfigurationError(AmpsParamError):
    """Exception raised for misuse of the loading pipeline (unknown strategies, bad options)."""

    pass


class ParsingError(AmpsParamError):
    """Exception raised for errors during parameter file parsing."""

    pass


class FormatRejectedError(ParsingError):
    """Exception raised when text is not an AMPS_PARAM.in file at all."""

    pass


class InternalCodeError(AmpsParamError):
    """Exception raised for errors in the internal code."""

    pass
