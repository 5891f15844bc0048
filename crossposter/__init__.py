"""Cross-post markdown articles to dev.to and Medium.

The package is split into the content pipeline (``processors``), the platform
clients (``platforms``), and the ``orchestrator`` that ties them together for
the command-line entrypoint in ``main``.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
