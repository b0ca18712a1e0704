"""Command-line interface for snakerename."""

import argparse
import sys

import argcomplete
from argcomplete.completers import FilesCompleter

from .case_utils import is_valid_identifier, to_snake_case
from .config import ConfigError, apply_config_defaults, load_config
from .formatters import format_json_output, format_table_output
from .host import InMemoryBuffer, rename_in_buffer, rename_selection
from .rewriter import plan_rewrite
from .utils import debug_print, set_debug_enabled

STDIN_MARKER = "-"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="snakerename",
        description="Rename an identifier to snake_case everywhere it stands alone in a file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  snakerename someVariableName                   (print the snake_case form)
  snakerename itemCount app.js                   (print app.js with itemCount renamed)
  snakerename itemCount app.js -i                (rewrite app.js in place)
  snakerename itemCount app.js --dry-run         (show the planned edits)
  snakerename itemCount app.js --dry-run --json  (planned edits as JSON)
  cat app.js | snakerename itemCount -           (read from standard input)
  snakerename count app.js --to item_count       (use an explicit replacement)

Autocomplete Setup:
  Bash:
    eval "$(register-python-argcomplete snakerename)"
  Zsh:
    autoload -U bashcompinit && bashcompinit
    eval "$(register-python-argcomplete snakerename)"
  Fish:
    register-python-argcomplete --shell fish snakerename | source

  Add the appropriate command to your shell config (~/.bashrc, ~/.zshrc).
        """,
    )

    parser.add_argument("name", help="Identifier to rename (camelCase, PascalCase, ...)")
    file_arg = parser.add_argument(
        "file", nargs="?", help="File to rewrite, '-' for standard input"
    )
    file_arg.completer = FilesCompleter()  # type: ignore[attr-defined]

    parser.add_argument(
        "-i", "--in-place", action="store_true", help="Write the result back to the file"
    )
    parser.add_argument(
        "--to", metavar="NEW", help="Replacement identifier instead of the snake_case form"
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Show the planned edits without rewriting"
    )
    parser.add_argument(
        "-j", "--json", action="store_true", help="Show planned edits as JSON instead of table"
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug output")
    config_arg = parser.add_argument("--config", help="Path to a YAML configuration file")
    config_arg.completer = FilesCompleter(allowednames=("yaml", "yml"))  # type: ignore[attr-defined]

    return parser


def read_source(path):
    """Read text from a file or standard input, keeping line endings as-is"""
    if path == STDIN_MARKER:
        debug_print("Reading buffer from standard input")  # pragma: no mutate
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_source(path, text):
    """Write text back to a file, keeping line endings as-is"""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def resolve_replacement(name, explicit_replacement):
    """Determine the replacement identifier, or None if the override is unusable"""
    if explicit_replacement is None:
        return to_snake_case(name)
    if not is_valid_identifier(explicit_replacement):
        return None
    return explicit_replacement


def main():
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args()

    if args.in_place and (not args.file or args.file == STDIN_MARKER):
        parser.error("--in-place requires a file argument")

    set_debug_enabled(args.debug)
    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    apply_config_defaults(args, config)
    set_debug_enabled(args.debug)
    if args.in_place and args.file == STDIN_MARKER:
        debug_print("Ignoring in_place from configuration for standard input")
        args.in_place = False

    name = args.name
    if not is_valid_identifier(name):
        print(f"'{name}' is not a valid identifier, nothing to rename.", file=sys.stderr)
        sys.exit(1)

    if not args.file:
        print(to_snake_case(name))
        return

    new_name = resolve_replacement(name, args.to)
    if new_name is None:
        print(f"ERROR: '{args.to}' is not a valid identifier", file=sys.stderr)
        sys.exit(1)
    debug_print(f"Renaming '{name}' -> '{new_name}' in {args.file}")

    try:
        text = read_source(args.file)
    except OSError as e:
        print(f"ERROR: Could not read {args.file}: {e}", file=sys.stderr)
        sys.exit(1)
    except UnicodeDecodeError as e:
        print(f"ERROR: {args.file} is not valid UTF-8: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        unchanged = new_name == name
        if unchanged:
            if args.to is None:
                print(f"'{name}' is already snake_case, nothing to rename.", file=sys.stderr)
            else:
                print(
                    f"Replacement '{new_name}' is the same as the original name, "
                    "nothing to rename.",
                    file=sys.stderr,
                )

        if args.dry_run:
            plan = [] if unchanged else plan_rewrite(text, name, new_name)
            if args.json:
                print(format_json_output(text, plan))
            else:
                print(format_table_output(text, plan))
            return

        buffer = InMemoryBuffer(text)
        if unchanged:
            count = 0
        else:
            if args.to is None:
                count = rename_selection(buffer, name)
            else:
                count = rename_in_buffer(buffer, name, new_name)

            if count:
                print(
                    f"Renamed {count} occurrence{'s' if count != 1 else ''} "
                    f"of '{name}' to '{new_name}'",
                    file=sys.stderr,
                )
            else:
                print(f"No free-standing occurrences of '{name}' found.", file=sys.stderr)

        if args.in_place:
            if count:
                try:
                    write_source(args.file, buffer.get_text())
                except OSError as e:
                    print(f"ERROR: Could not write {args.file}: {e}", file=sys.stderr)
                    sys.exit(1)
        else:
            sys.stdout.write(buffer.get_text())

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
