"""Command-line interface for repotree.

This module provides the ``repotree`` command, which maps a local directory or a
GitHub repository and writes the tree as ASCII text, a JSON document or markdown
documentation. It handles argument parsing, assembling the exclusion rules,
output redirection and signal management for graceful interruption handling.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution (bad input, upstream API failure, ...)
    2: Command-line syntax error
    126: Permission denied
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Print the tree of a directory
    $ repotree /path/to/dir

    # Save a repository's structure as JSON, with statistics on stderr
    $ repotree -f json -o tree.json -s stderr https://github.com/owner/repo
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from repotree.cli.argparser import create_parser, validate_args
from repotree.cli.safe_writer import SafeWriter
from repotree.cli.signal_handler import setup_signal_handling, signal_handler
from repotree.collectors.base_collector import print_warning
from repotree.collectors.github_collector import is_repository_url
from repotree.collectors.permission_action import PermissionAction
from repotree.exclusion_rules import (
    DEFAULT_JSON_EXCLUDES,
    DEFAULT_TREE_EXCLUDES,
    BaseExclusionRules,
    CompositeExclusionRules,
    GitIgnoreExclusionRules,
    SizeExclusionRules,
    SubstringExclusionRules,
)
from repotree.repotree import RepoTree
from repotree.stats import StatsSummary

PERMISSION_ACTIONS = {
    "ignore": PermissionAction.IGNORE,
    "warn": PermissionAction.WARN,
    "fail": PermissionAction.RAISE,
}


def format_summary(summary: StatsSummary) -> str:
    """Format summary statistics as human-readable lines.

    Example:
        >>> print(format_summary(StatsSummary(2, 1, 1536, {".py": 2}, 2)))
        Directories: 1
        Files: 2
        Total size: 1.5 KB
        Max depth: 2
        File types:
          .py: 2
    """
    result = [
        f"Directories: {summary.total_directories}",
        f"Files: {summary.total_files}",
        f"Total size: {summary.total_size}",
        f"Max depth: {summary.max_depth}",
    ]
    if summary.file_types:
        result.append("File types:")
        result.extend(f"  {extension}: {count}" for extension, count in summary.sorted_file_types().items())
    return "\n".join(result)


def build_exclusion_rules(
    args: argparse.Namespace, gitignore_rules: GitIgnoreExclusionRules
) -> Optional[BaseExclusionRules]:
    """Assemble the exclusion rules requested on the command line.

    Substring patterns come first: either the -x patterns, or the default set for
    the output format unless -n was given. Gitignore-style rules and the size
    limit follow when present.

    Returns:
        The combined rules, or None when nothing is excluded.
    """
    rules: List[BaseExclusionRules] = []

    if args.exclude_pattern:
        rules.append(SubstringExclusionRules(args.exclude_pattern))
    elif not args.no_default_excludes:
        defaults = DEFAULT_TREE_EXCLUDES if args.format == "text" else DEFAULT_JSON_EXCLUDES
        rules.append(SubstringExclusionRules(defaults))

    if gitignore_rules.has_rules():
        rules.append(gitignore_rules)

    if args.max_file_size:
        rules.append(SizeExclusionRules(args.max_file_size))

    if not rules:
        return None
    return CompositeExclusionRules(rules)


def map_source(args: argparse.Namespace, exclusion_rules: Optional[BaseExclusionRules]) -> RepoTree:
    """Collect and build the tree for the source named on the command line."""
    if is_repository_url(args.source) and not Path(args.source).exists():
        return RepoTree.from_github(
            args.source,
            token=args.token or os.environ.get("GITHUB_TOKEN") or None,
            ref=None if args.default_branch else args.ref,
            fallback_ref=args.fallback_ref or None,
            exclusion_rules=exclusion_rules,
            max_depth=args.max_depth,
            include_repository_info=args.format != "text",
            on_warning=print_warning,
        )

    return RepoTree.from_directory(
        args.source,
        exclusion_rules=exclusion_rules,
        permission_action=PERMISSION_ACTIONS[args.permission_action],
        follow_symlinks=args.follow_symlinks,
        max_depth=args.max_depth,
        on_warning=print_warning,
    )


def main() -> None:
    """Main entry point for the repotree command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    try:
        # Populated by -e/-i while parsing, in command-line order
        gitignore_rules = GitIgnoreExclusionRules()

        parser = create_parser(gitignore_rules)
        args = parser.parse_args()
        validate_args(args)

        exclusion_rules = build_exclusion_rules(args, gitignore_rules)
        mapped = map_source(args, exclusion_rules)

        output_file = args.output if args.output else sys.stdout.fileno()

        with SafeWriter(output_file) as safe_writer:
            try:
                if args.format == "text":
                    safe_writer.write_lines(mapped.stream_tree())
                else:
                    safe_writer.write(mapped.format(args.format))

                if args.summary:
                    summary_text = format_summary(mapped.summary)
                    if args.summary in ("stdout", "file"):
                        safe_writer.write("\n" + summary_text + "\n")
                    elif args.summary == "stderr":
                        print(summary_text, file=sys.stderr)

            except BrokenPipeError:
                signal_handler.sigpipe_received.set()

        if args.output:
            print(f"Tree written to {args.output}", file=sys.stderr)

    except PermissionError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126)
    except KeyboardInterrupt:
        signal_handler.sigint_received.set()
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    if signal_handler.sigpipe_received.is_set():
        sys.exit(141)
    elif signal_handler.sigint_received.is_set():
        sys.exit(130)


if __name__ == "__main__":
    main()
