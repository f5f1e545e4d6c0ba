# ABOUTME: Exception types raised by the building model and the save file codec
# ABOUTME: Model conditions are narrow; FileFormatError is the one decode failure


class FileFormatError(Exception):
    """Raised when a save file breaks the grammar or any building invariant.

    The message is for debugging only. Callers should treat every
    FileFormatError the same way.
    """


class DuplicateSensorError(Exception):
    """A room already has a sensor of the same kind"""


class DuplicateRoomError(Exception):
    """A floor already has a room with the same number"""


class DuplicateFloorError(Exception):
    """A building already has a floor with the same number"""


class InsufficientSpaceError(Exception):
    """Not enough unoccupied floor area for a new room"""


class FloorTooSmallError(Exception):
    """A floor cannot hold its rooms, or is larger than the floor below it"""


class NoFloorBelowError(Exception):
    """A floor has nothing underneath to support it"""


class FireDrillError(Exception):
    """A fire drill was requested somewhere it cannot run"""
