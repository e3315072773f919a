class StockSymbolRequiredError(ValueError):
    """Raised when a request carries no usable stock symbol."""


class TooManySymbolsError(ValueError):
    """Raised when more than two stock symbols are requested at once."""


class UpstreamPriceUnavailableError(RuntimeError):
    """Raised when every price source failed and the synthetic fallback is disabled."""
