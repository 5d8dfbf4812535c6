#!/usr/bin/env python
"""
Thin wrapper script to invoke the commit_body CLI.

Running ``python autocommit.py`` is equivalent to running the
``autocommit`` console script installed via ``pyproject.toml``.
"""

from commit_body.cli import main


if __name__ == "__main__":
    main(prog_name="autocommit")
