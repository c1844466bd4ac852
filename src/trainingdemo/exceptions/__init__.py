from trainingdemo.exceptions.handlers import (
    ConfigurationError,
    TrainingDemoException,
    ValidationError,
)

__all__ = [
    "TrainingDemoException",
    "ValidationError",
    "ConfigurationError",
]
