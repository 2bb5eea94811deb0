"""Router configuration: server binding, templates, redirects, and limits."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(debug=True, port=3000, template_dir="views")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # Templates (resolved relative to the working directory)
    template_dir: str | Path = "templates"
    autoescape: bool = True

    # Status used for a route's post-handler redirect
    redirect_status: int = 302

    # Limits
    max_content_length: int = 16 * 1024 * 1024  # 16 MB
