class DescriberError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ArgumentError(DescriberError):
    """Root path is missing, does not exist, or is not a directory."""


class IgnoreFileReadError(DescriberError):
    """The ignore file exists but could not be read."""


class TraversalError(DescriberError):
    pass


class ServiceError(DescriberError):
    pass


class SerializationError(DescriberError):
    pass


class WriteError(DescriberError):
    pass
