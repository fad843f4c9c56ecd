"""CLI entry point: run `sysreg a.json b.json --root src` or `python -m sysreg ...`."""

import json
import logging
import sys
from pathlib import Path


def main(argv=None) -> int:
    import argparse
    from .analysis.module_system.module_table import ModuleTable
    from .backends.javascript import print_js
    from .compiler.driver import SystemFormatter
    from .shared.errors import ErrorReporter, SysregError
    from .shared.serialization import serialize_tree, to_estree
    from .utils.config import FormatterOptions
    from .utils.io_utils import write_output_file

    parser = argparse.ArgumentParser(
        prog="sysreg",
        description="Format ES6 modules (ESTree JSON) as System.register calls.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="ESTree JSON files, in execution order")
    parser.add_argument("--root", type=Path, default=None,
                        help="Directory module names are relative to (default: parent of the first file)")
    parser.add_argument("--out-dir", type=Path, default=None,
                        help="Write one output file per module here instead of stdout")
    parser.add_argument("--anonymous", action="store_true", help="Omit module names from System.register")
    parser.add_argument("--emit", choices=("js", "estree", "sexpr"), default="js", help="Output format (default: js)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    for path in args.files:
        if not path.is_file():
            sys.stderr.write(f"sysreg: error: file not found: {path}\n")
            return 1
    root = (args.root or args.files[0].parent).resolve()

    reporter = ErrorReporter()
    table = ModuleTable()
    try:
        for path in args.files:
            table.add_file(path, root)
        table.analyze()
    except SysregError as e:
        reporter.report_exception(e)
        sys.stderr.write(reporter.format_all_errors() + "\n")
        return 1
    except (OSError, ValueError) as e:
        sys.stderr.write(f"sysreg: error: could not read input: {e}\n")
        return 1

    formatter = SystemFormatter(FormatterOptions(anonymous=args.anonymous))
    result = formatter.build_all(table.modules, reporter)

    suffix = {"js": ".js", "estree": ".json", "sexpr": ".sexpr"}[args.emit]
    for module, program in zip(result.modules, result.programs):
        if args.emit == "js":
            text = print_js(program)
        elif args.emit == "estree":
            text = json.dumps(to_estree(program), indent=2) + "\n"
        else:
            text = serialize_tree(program) + "\n"
        if args.out_dir is not None:
            write_output_file(args.out_dir / (module.name + suffix), text)
        else:
            sys.stdout.write(text)

    if not result.success:
        sys.stderr.write(result.reporter.format_all_errors() + "\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
