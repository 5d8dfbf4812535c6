"""
Dynamic version generation for commit_body.

The version is composed of:
- Major version: set manually in __init__.py (e.g. "0")
- Minor version: highest minor number among ``v{major}.{minor}`` tags
- Local part: short SHA of the commit the package was built from

Format: {major}.{minor}.dev0+g{sha}, e.g. 0.3.dev0+ga1b2c3d
"""

import subprocess
from pathlib import Path
from typing import List, Optional


def _git(args: List[str], repo_path: Optional[Path]) -> str:
    cmd = ["git"]
    if repo_path:
        cmd += ["-C", str(repo_path)]
    result = subprocess.run(cmd + args, capture_output=True, text=True, check=True)
    return result.stdout.strip()


def get_git_commit_sha(repo_path: Optional[Path] = None) -> str:
    """
    Return the 7 character SHA of HEAD, or 'unknown' outside a repository.
    """
    try:
        return _git(["rev-parse", "--short=7", "HEAD"], repo_path)
    except (subprocess.CalledProcessError, FileNotFoundError):
        return "unknown"


def parse_minor_version(tags: List[str]) -> int:
    """Return the highest minor number in tags shaped like ``v0.2``."""
    minor_versions = []
    for tag in tags:
        if not tag.startswith("v"):
            continue
        parts = tag[1:].split(".")
        if len(parts) < 2:
            continue
        try:
            minor_versions.append(int(parts[1]))
        except ValueError:
            continue
    return max(minor_versions) if minor_versions else 0


def get_minor_version_from_tags(repo_path: Optional[Path] = None) -> int:
    try:
        output = _git(["tag", "-l", "v*"], repo_path)
    except (subprocess.CalledProcessError, FileNotFoundError):
        return 0
    return parse_minor_version(output.split("\n"))


def generate_version(base_version: str, repo_path: Optional[Path] = None) -> str:
    """
    Generate a PEP 440 development version string.

    Args:
        base_version: The major version (e.g. "0")
        repo_path: Directory inside the repository; current directory if None.
    """
    minor = get_minor_version_from_tags(repo_path)
    commit_sha = get_git_commit_sha(repo_path)
    if commit_sha == "unknown":
        return f"{base_version}.{minor}.dev0"
    return f"{base_version}.{minor}.dev0+g{commit_sha}"
