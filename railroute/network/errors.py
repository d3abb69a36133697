"""Errors raised while mapping stored data to network entities."""


class DecodeError(ValueError):
    """A stored row or artifact record could not be turned into an entity."""
