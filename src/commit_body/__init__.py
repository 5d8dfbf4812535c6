"""
Top-level package for commit_body.

Builds a commented commit message body that groups staged files by
Conventional Commit type. The CLI entry point lives in
``commit_body.cli``.
"""

__all__ = ["__version__", "__base_version__"]

# Major version - controlled manually
__base_version__ = "0"

# Full version - major.minor.dev0+g{commit_sha}, minor from release tags
try:
    from pathlib import Path

    from commit_body._version import generate_version
    __version__ = generate_version(__base_version__, Path(__file__).resolve().parent)
except Exception:
    # Installed outside a git checkout
    __version__ = f"{__base_version__}.0.dev0"
