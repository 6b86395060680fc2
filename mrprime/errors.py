class MrPrimeError(Exception):
    """Base class for everything mrprime raises."""


class InvalidArgument(MrPrimeError, ValueError):
    pass


class EntropyUnavailable(MrPrimeError, OSError):
    """The secure byte source could not deliver. Never retried with a weaker source."""
