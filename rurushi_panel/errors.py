"""
Error types shared by the client and the panel layers.
"""


class RequestError(Exception):
    """Raised when a call to the Rurushi server does not yield a usable payload.

    Transport failures, non-success HTTP statuses, failed envelopes and
    malformed bodies all collapse into this one type. Only the message is kept.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
