# ============================================================================
# SOURCEFILE: cli.py
# RELPATH: namesafe/src/namesafe/cli.py
# PROJECT: NameSafe Download Filename Sanitizer
# VERSION: 1.0.0
# STATUS: Proposed
# ============================================================================

"""Command-Line Interface for NameSafe."""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import List, Optional

from namesafe import __version__
from namesafe.config import ConfigManager
from namesafe.exceptions import (
    NameSafeError,
    NameListReadError,
    ValidationError
)
from namesafe.logging import configure_utf8_logging, new_session
from namesafe.sanitizer import FilenameSanitizer, unicode_backend
from namesafe.validators import SEPARATOR_POLICIES, FilenameValidator, PathValidator


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="namesafe",
        description="Make filenames safe for downloads APIs on NTFS-family filesystems"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, default=Path("namesafe_config.json"))
    parser.add_argument("--log-dir", type=Path)
    parser.add_argument("--no-log", action="store_true")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # SANITIZE
    parser_sanitize = subparsers.add_parser("sanitize")
    parser_sanitize.add_argument("names", nargs="*")
    parser_sanitize.add_argument("--from-file", type=Path)
    parser_sanitize.add_argument("--json", action="store_true")

    # CHECK
    parser_check = subparsers.add_parser("check")
    parser_check.add_argument("names", nargs="*")
    parser_check.add_argument("--from-file", type=Path)
    parser_check.add_argument("--json", action="store_true")

    # PATH
    parser_path = subparsers.add_parser("path")
    parser_path.add_argument("names", nargs="*")
    parser_path.add_argument("--from-file", type=Path)
    parser_path.add_argument("--policy", choices=SEPARATOR_POLICIES)
    parser_path.add_argument("--json", action="store_true")

    # INFO
    subparsers.add_parser("info")

    return parser


def read_name_list(path: Path) -> List[str]:
    """
    Read candidate names, one per line.

    Only the line terminator ('\\n' or '\\r\\n') is removed, so leading and
    trailing spaces or dots reach the sanitizer. '-' reads standard input.

    Raises:
        NameListReadError: If the file cannot be read or decoded
    """
    try:
        if str(path) == "-":
            text = sys.stdin.read()
        else:
            text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise NameListReadError(str(path), "File not found")
    except (OSError, UnicodeDecodeError) as e:
        raise NameListReadError(str(path), str(e))

    # str.splitlines() would also split on U+2028, U+0085 and friends
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def collect_names(args) -> List[str]:
    names = list(args.names or [])
    if args.from_file is not None:
        names.extend(read_name_list(args.from_file))
    if not names:
        raise NameSafeError("No names given: pass names as arguments or use --from-file")
    return names


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    configure_utf8_logging()

    parser = build_parser()
    args = parser.parse_args(argv)
    logger = None

    try:
        config = ConfigManager(str(args.config), create=False)
        config.validate()

        log_dir = args.log_dir or config.get("global_settings.log_dir", "logs")
        write_log = not args.no_log and config.get("global_settings.logging_enabled", True)
        logger = new_session(str(log_dir), write_to_file=write_log)

        if args.command == "sanitize":
            code = handle_sanitize(args, config, logger)
        elif args.command == "check":
            code = handle_check(args, config, logger)
        elif args.command == "path":
            code = handle_path(args, config, logger)
        elif args.command == "info":
            code = handle_info(args)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            code = 1

        sys.exit(code)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)

    except NameSafeError as e:
        if logger is not None:
            logger.log_error(args.command, str(e), type(e).__name__)
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


def _wants_json(args, config: ConfigManager) -> bool:
    return args.json or config.get("app_defaults.output_format") == "json"


def _dump(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def handle_sanitize(args, config: ConfigManager, logger) -> int:
    """Handler for sanitize command."""
    names = collect_names(args)
    started = time.monotonic()
    logger.log_operation_start("sanitize", len(names), {"json": _wants_json(args, config)})

    results = FilenameSanitizer(logger=logger).sanitize_many(names)

    if _wants_json(args, config):
        _dump([r.to_dict() for r in results])
    else:
        for result in results:
            print(result.sanitized)

    logger.log_operation_complete(
        "sanitize",
        processed=len(results),
        changed=sum(1 for r in results if r.changed),
        invalid=0,
        elapsed_ms=int((time.monotonic() - started) * 1000)
    )
    return 0


def handle_check(args, config: ConfigManager, logger) -> int:
    """
    Handler for check command.

    Returns 1 if any name has a violation.
    """
    names = collect_names(args)
    started = time.monotonic()
    logger.log_operation_start("check", len(names), {"json": _wants_json(args, config)})

    validator = FilenameValidator()
    report = []
    invalid = 0
    for name in names:
        violations = validator.find_violations(name)
        details = [v.to_dict() for v in violations]
        logger.log_validation(name, not violations, details)
        if violations:
            invalid += 1
        report.append({"name": name, "valid": not violations, "violations": details})

    if _wants_json(args, config):
        _dump(report)
    else:
        for item in report:
            status = "OK" if item["valid"] else "INVALID"
            print(f"{status:<8} {item['name']!r}")
            for v in item["violations"]:
                print(f"  - index {v['index']}: {v['codepoint']} ({v['rule']})")
        print(f"\n{len(report) - invalid} valid, {invalid} invalid")

    logger.log_operation_complete(
        "check",
        processed=len(report),
        changed=0,
        invalid=invalid,
        elapsed_ms=int((time.monotonic() - started) * 1000)
    )
    return 1 if invalid else 0


def handle_path(args, config: ConfigManager, logger) -> int:
    """
    Handler for path command.

    Unsafe paths are reported per path; the exit code is 1 if any failed.
    """
    names = collect_names(args)
    policy = args.policy or config.get("app_defaults.separator_policy", "split")
    started = time.monotonic()
    logger.log_operation_start("path", len(names), {"policy": policy})

    validator = PathValidator(policy)
    report = []
    failed = 0
    for name in names:
        try:
            sanitized = validator.sanitize_path(name)
        except ValidationError as e:
            failed += 1
            logger.log_error("path", str(e), type(e).__name__, name=name)
            report.append({"original": name, "error": str(e)})
        else:
            report.append({"original": name, "sanitized": sanitized})

    if _wants_json(args, config):
        _dump(report)
    else:
        for item in report:
            if "error" in item:
                print(f"ERROR: {item['error']}", file=sys.stderr)
            else:
                print(item["sanitized"])

    logger.log_operation_complete(
        "path",
        processed=len(report),
        changed=sum(1 for r in report if r.get("sanitized", r["original"]) != r["original"]),
        invalid=failed,
        elapsed_ms=int((time.monotonic() - started) * 1000)
    )
    return 1 if failed else 0


def handle_info(args) -> int:
    """Handler for info command."""
    backend = unicode_backend()
    print(f"namesafe {__version__}")
    print(f"Unicode backend: {backend['backend']} {backend['regex_version']}")
    print(f"Interpreter unicodedata: {backend['unicodedata_version']}")
    return 0


if __name__ == "__main__":
    main()


# ============================================================================
# VERSION: 1.0.0
# EXIT CODES: 0 ok, 1 invalid names or NameSafeError, 2 usage, 130 interrupted
# ============================================================================
