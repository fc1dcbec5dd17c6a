"""Exceptions raised by listening-to.

Only the edges of the pipeline raise.  Streaming-link providers, the
thumbnailer and the fetch helper turn their failures into empty results;
what is left to raise is bad configuration, a provider list that names
something nobody registered, and faults in the now-playing source that a
host wants surfaced.
"""

from __future__ import annotations


class ListeningToError(Exception):
    """Root of the listening-to exception tree.

    ``provider_name`` names the upstream involved, if any, and is shown in
    brackets by ``str()``: ``[odesli] Provider is enabled but not registered``.
    """

    default_message = "listening-to failed"

    def __init__(self, message: str | None = None, provider_name: str | None = None) -> None:
        self.message = message or self.default_message
        self.provider_name = provider_name
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.provider_name:
            return f"[{self.provider_name}] {self.message}"
        return self.message


class ConfigurationError(ListeningToError):
    """Plugin options or settings are unusable.  Raised before any I/O."""

    default_message = "Invalid or missing configuration"


class MetadataSourceError(ListeningToError):
    """The now-playing source hit a fault it does not want absorbed.

    Propagates out of ``ListeningToPlugin.load``; nothing is cached.
    """

    default_message = "Now-playing source failed"


class ProviderUnavailableError(ListeningToError):
    """A streaming provider was enabled but no implementation is registered."""

    default_message = "Streaming provider is not available"
