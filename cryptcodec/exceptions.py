# cryptcodec/exceptions.py

class CryptCodecError(Exception):
    """Base class for everything raised by cryptcodec."""


class InvalidOptionError(CryptCodecError, ValueError):
    """A hash option (salt, iteration count, ...) is malformed or out of range."""


class InvalidEncodingError(CryptCodecError, ValueError):
    """Input is not valid hash64 text."""


class HashGenerationError(CryptCodecError, RuntimeError):
    """
    Raised instead of returning a sentinel, for codecs built with
    raise_on_failure=True. `sentinel` holds the value that would have been returned.
    """

    def __init__(self, message: str, sentinel: str):
        super().__init__(message)
        self.sentinel = sentinel
