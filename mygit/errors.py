class MygitError(Exception):
    """Base class for every failure reported to the user."""


class StorageError(MygitError):
    """A file or directory under the repository could not be read or written."""


class ObjectNotFoundError(MygitError):
    pass


class RefNotFoundError(MygitError):
    pass


class NothingStagedError(MygitError):
    pass


class NotStagedError(MygitError):
    pass


class NoSuchPathError(MygitError):
    pass
