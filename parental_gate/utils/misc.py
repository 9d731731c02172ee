"""Miscellaneous utility functions."""


def validate_port(port: int) -> bool:
    """Validate if the given port number is valid."""
    if not (1 <= port <= 65535):
        return False
    return True
