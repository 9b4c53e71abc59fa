class InvalidDirection(ValueError):
    """Raised when a move is requested in a direction outside up/down/left/right."""


class BoardError(ValueError):
    """Raised when a tile collection cannot be laid out on the grid."""
