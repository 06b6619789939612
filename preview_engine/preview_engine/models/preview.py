"""Preview rendering models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_ROOT_CANDIDATES: tuple[str, ...] = (
    "App",
    "Main",
    "Page",
    "Home",
    "Landing",
    "Blog",
    "Component",
    "Hero",
    "Layout",
)


class RenderMode(str, Enum):
    """Synthesis strategy chosen for a snapshot.  Never persisted."""

    PASSTHROUGH = "passthrough"
    COMPONENT = "component"
    PLAIN = "plain"


class SynthesisOptions(BaseModel):
    """External asset locations and mount settings used by the synthesizer."""

    react_url: str = "https://unpkg.com/react@18/umd/react.development.js"
    react_dom_url: str = "https://unpkg.com/react-dom@18/umd/react-dom.development.js"
    babel_url: str = "https://unpkg.com/@babel/standalone/babel.min.js"
    tailwind_url: str = "https://cdn.tailwindcss.com"
    mount_element_id: str = "root"
    root_candidates: tuple[str, ...] = Field(default=DEFAULT_ROOT_CANDIDATES)
    title: str = "Preview"
