"""App import resolution — ``"module:attribute"`` strings to App instances.

Shared by every command that operates on a user's app.
"""

import importlib
import sys

from tern.app import App


def resolve_app(import_string: str) -> App:
    """Resolve an import string to a tern App instance.

    Accepts ``"module:attribute"``; the attribute defaults to ``app``.
    If the attribute is a factory (callable but not an App), it is
    called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not an App.
    """
    module_path, _, attr_name = import_string.partition(":")
    attr_name = attr_name or "app"

    # Resolve modules relative to the working directory, like uvicorn does
    if "" not in sys.path:
        sys.path.insert(0, "")

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a tern.App instance"
        raise TypeError(msg)

    return obj


def load_or_exit(import_string: str) -> App:
    """``resolve_app`` for commands: report the error and exit 1."""
    try:
        return resolve_app(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
