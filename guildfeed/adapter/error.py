"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class GuildDirectoryError(AdapterError):
    """Guild directory could not be reached or answered unexpectedly."""

    pass
