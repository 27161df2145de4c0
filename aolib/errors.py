"""Exception types raised by aolib."""

__all__ = ["ConfigurationError", "IntegrationError"]


class ConfigurationError(ValueError):
    """Raised when telescope or solver parameters are invalid."""


class IntegrationError(RuntimeError):
    """Raised when the Hankel-transform PSF integral fails to converge.

    Attributes:
        frequency: Spatial frequency (1/length) of the failing sample.
        message: Convergence message reported by the quadrature routine.
    """

    def __init__(self, frequency: float, message: str):
        self.frequency = frequency
        self.message = message
        super().__init__(
            f"PSF integral did not converge at f={frequency:g}: {message}"
        )
