class StreamerInitError(RuntimeError):
    """The generative-language client could not be constructed at startup."""


class GenerationError(RuntimeError):
    """The external streaming call failed."""
