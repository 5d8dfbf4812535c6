"""
Command line interface for the commit_body tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``autocommit`` command. It locates the Git
repository, reads the staged changes and the current branch, classifies
every file, and writes the assembled commit body either to a file
(typically ``.git/COMMIT_EDITMSG`` from a ``prepare-commit-msg`` hook)
or to standard output.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click

from commit_body import __version__
from commit_body.config.loader import ConfigError, load_config
from commit_body.grouping.change_classifier import ChangeClassifier
from commit_body.grouping.message_assembler import assemble, build_records
from commit_body.vcs.base import ChangeEnumerator
from commit_body.vcs.git_client import GitClient, GitError

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests). When logging is configured by
# the CLI, root handlers will be added and messages will propagate.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 4
EXIT_VCS_FAILURE = 5
EXIT_WRITE_FAILURE = 6

#: owner read/write, group and others read
MESSAGE_FILE_MODE = 0o644


def print_info(message: str) -> None:
    """Print an info message to stderr, stdout may carry the body."""
    click.echo(f"ℹ {message}", err=True)


def print_error(message: str) -> None:
    """Print an error message."""
    click.echo(f"✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def build_message(
    client: ChangeEnumerator,
    header: Optional[str] = None,
    footer: Optional[str] = None,
    classifier: Optional[ChangeClassifier] = None,
    workers: Optional[int] = None,
) -> str:
    """Build the commit body for the changes ``client`` reports.

    Raises
    ------
    GitError
        If the branch or the status cannot be read.
    """
    branch_name = client.get_current_branch()
    changes = client.get_changes()
    logger.debug("Branch %s, %d change(s)", branch_name, len(changes))
    records = build_records(changes, classifier, max_workers=workers)
    return assemble(records, branch_name=branch_name, header=header, footer=footer)


def write_message(path: Path, message: str) -> None:
    """Write ``message`` to ``path`` verbatim and make it world readable.

    Raises
    ------
    OSError
        If the file cannot be written.
    """
    with open(path, "w", encoding="utf-8", newline="\n") as fh:
        fh.write(message)
    os.chmod(path, MESSAGE_FILE_MODE)


@click.command()
@click.argument("commit_msg_file", required=False)
@click.argument("header_arg", metavar="[HEADER]", required=False)
@click.argument("footer_arg", metavar="[FOOTER]", required=False)
@click.option("--header", "header_opt", help="Line placed before the grouped files.")
@click.option("--footer", "footer_opt", help="Line placed after the grouped files.")
@click.option("--stdout", "to_stdout", is_flag=True, help="Write to stdout and don't overwrite a file.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="autocommit")
def main(
    commit_msg_file: Optional[str],
    header_arg: Optional[str],
    footer_arg: Optional[str],
    header_opt: Optional[str],
    footer_opt: Optional[str],
    to_stdout: bool,
    verbose: bool,
) -> None:
    """Group staged files by Conventional Commit type into a commit body.

    COMMIT_MSG_FILE is the file to write, usually the path git passes to a
    prepare-commit-msg hook. Without it the body is printed to stdout.
    """
    ctx = click.get_current_context(silent=True)

    try:
        try:
            config = load_config()
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        # Configure logging. Use force=True to ensure handlers are
        # reconfigured on subsequent invocations (important for tests).
        logging.basicConfig(
            level=logging.DEBUG if verbose else getattr(logging, config["log_level"]),
            format="%(levelname)s: %(message)s",
            force=True,
        )

        header = header_opt or header_arg or config["header"]
        footer = footer_opt or footer_arg or config["footer"]

        if not commit_msg_file and not to_stdout:
            print_info("Commit message file not provided. Defaulting to stdout.")
            to_stdout = True

        repo_root = GitClient.find_repo_root(Path.cwd())
        if repo_root is None:
            print_error("Not in a git repository.")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        logger.debug("Repository root: %s", repo_root)

        try:
            message = build_message(
                GitClient(repo_root),
                header=header,
                footer=footer,
                workers=config["workers"],
            )
        except GitError as exc:
            print_error(f"Failed to read repository status: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        if to_stdout:
            click.echo(message, nl=False)
            raise click.exceptions.Exit(EXIT_SUCCESS)

        target = Path(commit_msg_file)
        try:
            write_message(target, message)
        except OSError as exc:
            print_error(f"Error writing to commit message file: {exc}")
            raise click.exceptions.Exit(EXIT_WRITE_FAILURE)

        logger.debug("Wrote commit body to %s", target)
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
