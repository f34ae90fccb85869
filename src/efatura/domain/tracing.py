"""Per-component loggers."""

import logging


def component_logger(component: object) -> logging.Logger:
    """Logger named after the class of a component (or the class itself)."""
    cls = component if isinstance(component, type) else type(component)
    return logging.getLogger(f"{cls.__module__}.{cls.__qualname__}")
