"""Template rendering from a fixed templates root.

Uses a sandboxed Jinja2 environment: templates interpolate context
values through a fixed grammar and can never execute caller-supplied
code. The environment is created once per App and shared read-only.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import anyio.to_thread
from jinja2 import FileSystemLoader, StrictUndefined, TemplateError, TemplateNotFound
from jinja2.sandbox import SandboxedEnvironment

from tern.config import RouterConfig
from tern.errors import RenderError

logger = logging.getLogger("tern.templating")


class TemplateRenderer:
    """Render templates found under a single root directory.

    Usage::

        renderer = TemplateRenderer("templates")
        html = renderer.render("users/detail.html", {"user_id": "42"})
        html = await renderer.render_async("home.html", {"title": "Home"})
    """

    __slots__ = ("_env", "root")

    def __init__(self, root: str | Path = "templates", *, autoescape: bool = True) -> None:
        self.root = Path(root)
        self._env = SandboxedEnvironment(
            loader=FileSystemLoader(str(self.root)),
            autoescape=autoescape,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @classmethod
    def from_config(cls, config: RouterConfig) -> "TemplateRenderer":
        return cls(config.template_dir, autoescape=config.autoescape)

    def path_of(self, name: str) -> Path:
        """Filesystem path of template *name* (not checked for existence)."""
        return self.root / name

    def render(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        """Render template *name* with *context*.

        Raises ``RenderError`` if the file cannot be found or read, or if
        rendering fails (including undefined context variables).
        """
        try:
            template = self._env.get_template(name)
            return template.render(dict(context or {}))
        except TemplateNotFound as exc:
            logger.error("template not found: %s (root %s)", name, self.root)
            raise RenderError(name, "not found") from exc
        except (TemplateError, OSError) as exc:
            logger.error("template rendering error in %s: %s", name, exc)
            raise RenderError(name, str(exc)) from exc

    async def render_async(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        """Render in a worker thread so file reads never block the loop."""
        return await anyio.to_thread.run_sync(self.render, name, context)
