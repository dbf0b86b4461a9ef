"""Exception types raised by the conversion core"""


class OutbreakError(Exception):
    """Base class for document conversion failures."""


class FrontmatterError(OutbreakError, ValueError):
    """The YAML frontmatter could not be turned into page properties."""


class TaskDateError(OutbreakError, ValueError):
    """A task date token is not a valid calendar date."""
