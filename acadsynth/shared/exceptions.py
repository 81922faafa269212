"""
Exception hierarchy for acadsynth.
"""


class AcadSynthError(Exception):
    """Base exception for all acadsynth errors."""
    pass


class ConfigurationError(AcadSynthError):
    """Raised when generation settings cannot produce a consistent calendar or dataset."""
    pass


class DatasetError(AcadSynthError):
    """Raised when a dataset generation request is invalid."""
    pass


class StudentNotFoundError(AcadSynthError):
    """Raised when a student id is not present in the generated dataset."""
    pass
