class HabitError(Exception):
    """Base class for errors raised by the habit dashboard."""


class ValidationError(HabitError, ValueError):
    pass


class DuplicateError(HabitError, ValueError):
    pass


class ParseError(HabitError, ValueError):
    pass


class PersistenceError(HabitError, RuntimeError):
    """A write to the record store failed.

    ``failed_ids`` names the records that could not be written when the
    failure came out of a batch.
    """

    def __init__(self, message, failed_ids=None, status_code=None, detail=None):
        super().__init__(message)
        self.failed_ids = list(failed_ids or [])
        self.status_code = status_code
        self.detail = detail
