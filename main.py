import argparse
import json
import logging
import sys

from pydantic import ValidationError

# --- CUSTOM MODULES ---
from core.codegen import generate
from core.differ import diff, diff_stats, format_diff
from core.models import Window
from core.validator import analyze_window


def load_window(path):
    with open(path, "r", encoding="utf-8") as f:
        return Window.model_validate(json.load(f))


def cmd_generate(args):
    code = generate(load_window(args.layout))
    if args.output:
        with open(args.output, "w", encoding="utf-8", newline="") as f:
            f.write(code)
        print(f"Wrote {args.output}")
    else:
        sys.stdout.write(code)
    return 0


def cmd_diff(args):
    entries = diff(generate(load_window(args.old)), generate(load_window(args.new)))
    print(format_diff(entries))
    stats = diff_stats(entries)
    print(f"\n{stats['added']} added, {stats['removed']} removed, {stats['same']} unchanged")
    return 0


def cmd_check(args):
    report = analyze_window(load_window(args.layout))
    for issue in report.issues:
        print(f"WARN: {issue.message}")
    print("Syntax Check Passed: Script looks good!" if report.passed
          else f"Analysis completed with {len(report.issues)} warnings.")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="tora-builder", description="Tora GUI Builder script tools")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("generate", help="Compile a layout JSON file to Lua")
    p.add_argument("layout")
    p.add_argument("-o", "--output")
    p.set_defaults(func=cmd_generate)

    p = sub.add_parser("diff", help="Diff the generated code of two layouts")
    p.add_argument("old")
    p.add_argument("new")
    p.set_defaults(func=cmd_diff)

    p = sub.add_parser("check", help="Run the advisory layout checks")
    p.add_argument("layout")
    p.set_defaults(func=cmd_check)
    return parser


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
