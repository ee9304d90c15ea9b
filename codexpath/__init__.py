"""Top-level package for codexpath.

This package locates an external CLI (the Codex CLI by default) and builds
the PATH a GUI-launched process needs to spawn it. The main entry points are
`BinaryLocator`, `PathBuilder`, and `LoginShellPathCache`.
"""

from .locator import BinaryLocator
from .models import InvocationPurpose, PathDebugSnapshot
from .path_builder import PathBuilder
from .shell_cache import LoginShellPathCache, create_login_shell_cache
from .shell_capture import LoginShellPathCapturer

__all__ = [
    "BinaryLocator",
    "InvocationPurpose",
    "LoginShellPathCache",
    "LoginShellPathCapturer",
    "PathBuilder",
    "PathDebugSnapshot",
    "create_login_shell_cache",
    "__version__",
]

__version__ = "0.1.0"
