#!/usr/bin/env python3
"""abbreviate_cwd.py - Abbreviate the working directory for shell prompts.

Features:
    1. $HOME -> ~ replacement (whole segments only)
    2. Every segment but the last shortened to its first character
    3. Dot-prefixed segments keep two characters (.config -> .c)

Examples:
    /home/alice/projects/demo -> ~/p/demo
    /home/alice/.config/nvim  -> ~/.c/nvim
    /var/log/nginx            -> /v/l/nginx

Usage:
    python3 abbreviate_cwd.py
    python3 abbreviate_cwd.py PATH [PATH ...]
    python3 abbreviate_cwd.py --shell-func
"""

import argparse
import errno
import logging
import os
import shlex
import sys
from pathlib import PurePath

logger = logging.getLogger(__name__)

HOME_MARKER = "~"
SEPARATOR = "/"


class PathDecodeError(OSError):
    """A path segment holds bytes that do not decode to text."""

    def __init__(self, path):
        super().__init__(errno.EILSEQ, "Path is not representable as text", path)


def get_home_dir():
    """Get home directory path, or None if it cannot be determined."""
    home = os.path.expanduser(HOME_MARKER)
    if home == HOME_MARKER:
        return None
    return home


def get_cwd():
    """Get the current working directory.

    Raises OSError when the directory was removed or is not accessible.
    """
    return os.getcwd()


def replace_home(path, home):
    """Replace a leading home directory with the ~ segment.

    Matching is done on whole segments, so /home/al is not under /home/a.
    """
    path = PurePath(path)
    if not home:
        return path
    home = PurePath(home)
    if not home.parts or path.parts[:len(home.parts)] != home.parts:
        return path
    logger.debug("Substituting %s for home directory %s", HOME_MARKER, home)
    return PurePath(HOME_MARKER).joinpath(path.relative_to(home))


def abbreviate_segment(segment):
    """First character of a segment, or the first two if it starts with '.'."""
    if segment[0] == ".":
        return segment[:2]
    return segment[0]


def _check_text(segment, path):
    try:
        segment.encode("utf-8")
    except UnicodeEncodeError:
        raise PathDecodeError(str(path)) from None


def abbreviate(input_path, home_path=None):
    """Abbreviate a path for display.

    The home prefix becomes ``~``, the last segment is kept whole and every
    other segment is cut down by :func:`abbreviate_segment`.

    Raises PathDecodeError if a segment is not valid text.
    """
    path = replace_home(input_path, home_path)
    segments = path.parts
    count = len(segments)

    result = []
    for index, segment in enumerate(segments, start=1):
        if not segment:
            continue
        _check_text(segment, input_path)
        if index > 1:
            result.append(SEPARATOR)
        if index == 1 and path.root:
            # Root is implied by the separator before the next segment
            if count == 1:
                result.append(SEPARATOR)
                break
            continue
        if index == count:
            result.append(segment)
        else:
            result.append(abbreviate_segment(segment))

    return "".join(result)


def print_shell_func():
    """Output a shell function definition that can be eval'd."""
    command = f"{shlex.quote(sys.executable)} {shlex.quote(os.path.abspath(__file__))}"
    print(f"""# Shell function for abbreviated prompt paths
# Usage: eval "$(python3 abbreviate_cwd.py --shell-func)"
#        PS1='$(prompt_cwd) \\$ '
prompt_cwd() {{
    {command} 2>/dev/null || printf '%s' "$PWD"
}}""")


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Abbreviate a directory path for display in a shell prompt'
    )
    parser.add_argument('paths', nargs='*', metavar='PATH',
                        help='Paths to abbreviate (default: current directory)')
    parser.add_argument('--shell-func', action='store_true',
                        help='Print a prompt_cwd shell function and exit')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log debug information to stderr')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if args.shell_func:
        print_shell_func()
        return 0

    # Abbreviate everything first so a failure prints nothing to stdout
    try:
        home = get_home_dir()
        if home is None:
            logger.debug("Home directory not determinable, skipping %s substitution",
                         HOME_MARKER)
        if args.paths:
            paths = [os.path.abspath(os.path.expanduser(p)) for p in args.paths]
        else:
            paths = [get_cwd()]
        lines = [abbreviate(p, home) for p in paths]
    except OSError as e:
        print(f"Failure: {e}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
