"""Host-side services: container model and resize debouncing."""

from .container_host import ContainerStyle, Document, StaticContainer, default_document
from .resize_debouncer import ManualScheduler, QtTimerScheduler, ResizeDebouncer, default_scheduler

__all__ = [
    "ContainerStyle",
    "Document",
    "StaticContainer",
    "default_document",
    "ManualScheduler",
    "QtTimerScheduler",
    "ResizeDebouncer",
    "default_scheduler",
]
