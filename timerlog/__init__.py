"""Top-level package for timerlog, a small start/end timing facility."""

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return version("timerlog")
        except PackageNotFoundError:  # pragma: no cover - running from a source checkout
            return "0.1.0"
    raise AttributeError(name)
