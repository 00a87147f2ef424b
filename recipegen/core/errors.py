class ProviderError(Exception):
    """A provider could not produce a usable result; the chain moves on."""

    def __init__(self, provider: str, reason: str):
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


class ProviderNotConfigured(ProviderError):
    """Missing credentials or disabled by AI_MODE."""


class RecognitionFailed(Exception):
    """Every vision strategy was exhausted without a result."""
