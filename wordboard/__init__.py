from .controller import SessionController
from .dictionary import Dictionary
from .matcher import score
from .validator import validate
from .render import TextUI

__all__ = ["SessionController", "Dictionary", "score", "validate", "TextUI"]
