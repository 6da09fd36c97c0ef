from .logging import StreamLogger

__all__ = ["StreamLogger"]
