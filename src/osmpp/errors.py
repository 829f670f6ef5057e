# osmpp/errors.py


class OsmppError(RuntimeError):
    """Base class for every fatal condition of a run."""


class InputOpenError(OsmppError):
    pass


class OutputOpenError(OsmppError):
    pass


class DecodeError(OsmppError):
    pass


class WriteError(OsmppError):
    pass
