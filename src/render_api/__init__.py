"""render-api - HTTP service for headless page rendering and scripted browser runs."""

__version__ = "0.1.0"

from render_api.config import Config
from render_api.errors import RenderError
from render_api.interpreter import StepInterpreter
from render_api.service import RenderService
from render_api.session import SessionManager
from render_api.validation import is_allowed_target

__all__ = [
    "Config",
    "RenderError",
    "RenderService",
    "SessionManager",
    "StepInterpreter",
    "is_allowed_target",
]
