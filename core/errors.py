# Simulator error hierarchy. Every error here aborts the current run.


class SimulatorError(Exception):
    pass


class ConfigError(SimulatorError):
    pass


class ConfigFormatError(ConfigError):
    pass


class ConfigIOError(ConfigError):
    pass


class MetaDataError(SimulatorError):
    pass


class MetaDataFormatError(MetaDataError):
    pass


class MetaDataIOError(MetaDataError):
    pass


class UnrecognizedOperation(SimulatorError):
    pass


class InvalidStateTransition(SimulatorError):
    pass
