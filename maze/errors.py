"""
Exceptions raised by the maze model and the algorithm runners
"""


class MazeError(Exception):
    """Base class for problems that are reported to the user"""


class MazeFormatError(MazeError, ValueError):
    """Imported maze data is missing fields or has out-of-range coordinates"""


class MissingEndpointsError(MazeError):
    """A solve was requested on a grid without both a start and an end cell"""


class MazeBusyError(MazeError):
    """The grid was asked to change while a solve is running"""


class PathReconstructionError(MazeError, RuntimeError):
    """Parent links did not lead back to the start cell"""


class UnknownAlgorithmError(LookupError):
    """
    Algorithm name not found in a registry.

    Not a MazeError: this is a caller/configuration bug, not bad user data.
    """
    def __init__(self, kind, name, known):
        self.kind = kind
        self.name = name
        self.known = list(known)
        super().__init__(
            f"Unknown {kind} algorithm {name!r} (expected one of: {', '.join(self.known)})"
        )
