from __future__ import annotations


class DeepfolioError(Exception):
    """Base class for errors raised by deepfolio."""


class GenerationError(DeepfolioError):
    """The generation service call failed or returned something that is not JSON."""


class AuthError(DeepfolioError):
    pass


class FileTypeError(DeepfolioError):
    pass
