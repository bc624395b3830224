from .detection_commands import (
    AnalyzeImageCommand,
    RecordDetectionCommand,
    RemoveDetectionCommand,
    UpdateDetectionCommand,
)

__all__ = [
    "AnalyzeImageCommand",
    "RecordDetectionCommand",
    "RemoveDetectionCommand",
    "UpdateDetectionCommand",
]
