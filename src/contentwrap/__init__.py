"""Top-level package for contentwrap."""

from importlib import metadata as _metadata

from .content import (
    ContentFactory,
    ContentKind,
    ContentObject,
    ImageContent,
    from_base64,
    from_best_guess,
    from_buffer,
    from_handle,
    from_path,
)

__all__ = [
    "__version__",
    "ContentFactory",
    "ContentKind",
    "ContentObject",
    "ImageContent",
    "from_base64",
    "from_best_guess",
    "from_buffer",
    "from_handle",
    "from_path",
]


def __getattr__(name: str):
    if name == "__version__":
        return _metadata.version("contentwrap")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(list(globals().keys()) + ["__version__"])
