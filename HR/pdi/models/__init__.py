from .objective import PDIObjective
from .comment import PDIComment
from .achievement import Achievement

__all__ = [
    'PDIObjective',
    'PDIComment',
    'Achievement',
]
