"""Command-line argument parsing for repotree.

This module defines the command-line interface for repotree,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from repotree import __version__
from repotree.exclusion_rules.base_rules import BaseExclusionRules
from repotree.repotree import OUTPUT_FORMATS


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class for handling gitignore-style exclusion rules.

    The returned action updates the provided rules object as arguments are
    processed, which preserves the exact order of -e/--exclude files and
    -i/--ignore patterns as they appear on the command line. Order matters for
    negation patterns.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        """Action to update exclusion rules as arguments are processed."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if option_string in ("-e", "--exclude"):
                try:
                    exclusion_rules.load_rules(Path(str(values)))
                except FileNotFoundError as e:
                    parser.error(str(e))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            recorded = getattr(namespace, self.dest, None) or []
            recorded.append(values)
            setattr(namespace, self.dest, recorded)

    return ExclusionRulesAction


def non_negative_int(value: str) -> int:
    """argparse type for depth limits."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"value must not be negative: {number}")
    return number


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The gitignore-style rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with repotree's options.
    """
    description = """
    repotree: Map the structure of a directory or a GitHub repository.

    The source is listed recursively and folded into a tree, directories first and
    then files, each group in lexical order. The tree can be printed as ASCII art,
    saved as a JSON document with summary statistics, or written up as markdown
    documentation.

    By default, paths containing node_modules, package.json or package-lock.json
    are excluded from text output, and paths containing node_modules,
    package-lock.json or .git from JSON and markdown output. Use -x to replace
    these substring patterns, or -n to drop them.

    Remote repositories are listed through the GitHub API. Set GITHUB_TOKEN or
    pass --token to raise the API rate limit and access private repositories.
    """

    epilog = """
    Examples:
      # Print the tree of a local project
      repotree /path/to/project

      # Print the tree of a GitHub repository (tries "main", then "master")
      repotree https://github.com/owner/repo

      # List a specific branch or the repository's default branch
      repotree -r develop https://github.com/owner/repo
      repotree --default-branch https://github.com/owner/repo

      # Replace the default exclusion substrings
      repotree -x .git -x dist -x __pycache__ /path/to/project

      # Add gitignore-style exclusions from files or patterns
      repotree -e .gitignore -i "*.log" -i "!keep.log" /path/to/project

      # Skip files larger than 1 MB and stop three levels deep
      repotree -m 1MB -d 3 /path/to/project

      # Save the JSON artifact with statistics
      repotree -f json -o tree.json /path/to/project

      # Generate markdown documentation for a repository
      repotree -f markdown -o docs/structure.md https://github.com/owner/repo

      # Print summary statistics to stderr
      repotree -s stderr /path/to/project

      # Handle unreadable directories
      repotree -P warn /path/to/project    # Continue with warnings (default)
      repotree -P fail /path/to/project    # Stop on permission errors
      repotree -P ignore /path/to/project  # Skip silently
    """

    parser = argparse.ArgumentParser(
        prog="repotree",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"repotree {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "source",
        help="Local directory or GitHub repository URL (https://github.com/<owner>/<repo>) to map.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. Missing parent directories are created. Defaults to stdout.",
    )
    parser.add_argument(
        "-x",
        "--exclude-pattern",
        action="append",
        metavar="SUBSTRING",
        help=(
            "Exclude every path containing SUBSTRING anywhere in its relative path. Can be specified "
            "multiple times; when given, replaces the default exclusion substrings entirely."
        ),
    )
    parser.add_argument(
        "-n",
        "--no-default-excludes",
        action="store_true",
        help="Do not apply the default exclusion substrings.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="Path to a gitignore-style exclusion file (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Individual gitignore-style pattern to exclude (wildcards, build/, !negation, ...). Can be "
            "specified multiple times; processed in order together with -e/--exclude."
        ),
    )
    parser.add_argument(
        "-m",
        "--max-file-size",
        metavar="SIZE",
        help="Exclude files larger than SIZE (e.g. 500KB, 1MB, 2GiB or a number of bytes).",
    )
    parser.add_argument(
        "-d",
        "--max-depth",
        type=non_negative_int,
        metavar="N",
        help="Only include paths at most N levels deep.",
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Follow symbolic links in local directories. By default links are listed as files.",
    )
    parser.add_argument(
        "-P",
        "--permission-action",
        choices=["ignore", "warn", "fail"],
        default="warn",
        help="How to handle unreadable local subdirectories (default: warn).",
    )
    parser.add_argument(
        "-r",
        "--ref",
        default="main",
        metavar="REF",
        help="Branch, tag or commit of a GitHub repository to list (default: main).",
    )
    parser.add_argument(
        "--fallback-ref",
        default="master",
        metavar="REF",
        help='Ref tried once if --ref does not exist (default: master). Pass "" to disable.',
    )
    parser.add_argument(
        "--default-branch",
        action="store_true",
        help="List the repository's default branch instead of --ref.",
    )
    parser.add_argument(
        "--token",
        metavar="TOKEN",
        help="GitHub API token. Defaults to the GITHUB_TOKEN environment variable.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout", "file"],
        help="Print summary statistics. Valid destinations: stderr, stdout, file (requires -o)",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.summary == "file" and not args.output:
        raise ValueError("--summary=file requires -o/--output to be specified")

    if args.summary in ("stdout", "file") and args.format != "text":
        raise ValueError(
            f"--summary={args.summary} only works with text output; use --summary=stderr with -f {args.format}"
        )

    if args.exclude_pattern and args.no_default_excludes:
        raise ValueError("-x/--exclude-pattern and -n/--no-default-excludes are mutually exclusive")

    if args.exclude_pattern and any(not pattern for pattern in args.exclude_pattern):
        raise ValueError("-x/--exclude-pattern requires a non-empty substring")
