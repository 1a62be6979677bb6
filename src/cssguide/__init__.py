"""cssguide: style-guide linter and formatter for CSS and SCSS stylesheets."""

__version__ = "0.1.0"

from cssguide.config import StyleConfig, load_config  # noqa: E402
from cssguide.engine import check, run_checks  # noqa: E402
from cssguide.errors import ConfigError, CSSGuideError  # noqa: E402
from cssguide.formatter import FormatResult, format, format_text  # noqa: E402
from cssguide.model import Severity, Violation  # noqa: E402

__all__ = [
    "__version__",
    "StyleConfig",
    "load_config",
    "check",
    "run_checks",
    "format",
    "format_text",
    "FormatResult",
    "Severity",
    "Violation",
    "CSSGuideError",
    "ConfigError",
]
