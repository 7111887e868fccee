from .app.main import analyze, knowledge_base, recent_analyses

__all__ = [
    "analyze",
    "knowledge_base",
    "recent_analyses",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
