class ModuleConfigurationLoadError(Exception):
    """
    Exception raised when a configuration document cannot be read or parsed.
    """

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load configuration file '{path}': {reason}")


class StructureLoadError(Exception):
    """
    Exception raised when a database structure document cannot be read or parsed.
    """

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load structure file '{path}': {reason}")
