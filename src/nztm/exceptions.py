class NZTMError(Exception):
    """Base class for errors raised by the nztm package."""


class ConfigurationError(NZTMError, ValueError):
    """The defining constants of a projection are unusable."""


class InvalidInputError(NZTMError, ValueError):
    """A coordinate is missing, non-numeric or not finite."""


class SingularInputError(NZTMError, ValueError):
    """The series divides by cos(latitude) and the latitude is at a pole."""


class OutOfValidRegionWarning(UserWarning):
    """
    The point lies far from the central meridian. Redfearn's series is
    truncated, so accuracy degrades quickly outside a few degrees of it.
    """
