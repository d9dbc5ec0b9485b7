"""CLI entrypoint for basedirs."""

from __future__ import annotations

import argparse
import sys
from pathlib import PurePosixPath, PureWindowsPath
from typing import Any

from .config import (
    load_config_or_default,
    resolve_config_path,
    save_default_config,
    validate_config,
)
from .errors import BaseDirsError, ConfigError
from .platforms import Platform, detect_platform, platform_names
from .resolver import FIELDS, directories_payload, read_environment, resolve_with_sources
from .util import append_log, parse_kv_pairs, render_listing, write_json, write_yaml


def _load_checked_config(args: argparse.Namespace) -> dict[str, Any]:
    config = load_config_or_default(resolve_config_path(getattr(args, "config", None)))
    errors, warnings = validate_config(config)
    if not getattr(args, "quiet", False):
        for warning in warnings:
            sys.stderr.write(f"warning: {warning}\n")
    if errors:
        raise ConfigError("invalid config: " + "; ".join(errors), hint="run `basedirs validate` for details")
    return config


def _build_environ(args: argparse.Namespace, config: dict[str, Any]) -> dict[str, str]:
    environ = {} if args.clean_env else read_environment()
    environ.update({str(k): str(v) for k, v in (config.get("env") or {}).items()})
    environ.update(parse_kv_pairs(args.env))
    return environ


def _target_platform(args: argparse.Namespace, config: dict[str, Any]) -> Platform:
    name = args.platform or config.get("platform")
    if name:
        return Platform.from_name(name)
    return detect_platform()


def _resolve_from_args(args: argparse.Namespace) -> tuple[dict[str, Any], dict[str, Any]]:
    config = _load_checked_config(args)
    environ = _build_environ(args, config)
    platform = _target_platform(args, config)
    passwd_path = args.passwd or config.get("passwd_path")
    options = {"magnitude": args.magnitude, "passwd_path": passwd_path}

    dirs, sources = resolve_with_sources(environ, platform, **options)
    payload = directories_payload(dirs, platform)
    if args.explain:
        payload["sources"] = sources

    logging_cfg = config.get("logging") or {}
    if isinstance(logging_cfg, dict):
        append_log(logging_cfg.get("path"), payload)
    return payload, config


def _output_format(args: argparse.Namespace, config: dict[str, Any]) -> str:
    if args.format:
        return args.format
    output_cfg = config.get("output") or {}
    return str(output_cfg.get("format") or "text")


def cmd_show(args: argparse.Namespace) -> int:
    payload, config = _resolve_from_args(args)
    fmt = _output_format(args, config)
    if fmt == "json":
        write_json(payload)
    elif fmt == "yaml":
        write_yaml(payload)
    else:
        sys.stdout.write(render_listing(payload["basedirs"]))
        if args.explain:
            sys.stdout.write(render_listing(payload["sources"], key="sources"))
    if payload["missing"] and not args.quiet:
        sys.stderr.write("warning: unresolved: " + ", ".join(payload["missing"]) + "\n")
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    payload, _ = _resolve_from_args(args)
    value = payload["basedirs"][args.field]
    if args.explain:
        sys.stderr.write(f"{args.field}: {payload['sources'][args.field]}\n")
    if not value:
        if not args.quiet:
            sys.stderr.write(f"warning: {args.field} is unresolved\n")
        return 1
    sys.stdout.write(value + "\n")
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    cfg_path = resolve_config_path(args.config)
    existed = cfg_path.exists()
    save_default_config(cfg_path, overwrite=args.force)
    if existed and not args.force:
        sys.stderr.write(f"Config exists at {cfg_path} (use --force to overwrite)\n")
    else:
        sys.stderr.write(f"Wrote config to {cfg_path}\n")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    cfg_path = resolve_config_path(args.config)
    if not cfg_path.exists():
        sys.stderr.write(f"warning: no config at {cfg_path}; defaults apply\n")
    config = load_config_or_default(cfg_path)
    errors, warnings = validate_config(config)
    for warning in warnings:
        sys.stderr.write(f"warning: {warning}\n")
    for error in errors:
        sys.stderr.write(f"error: {error}\n")
    return 1 if errors else 0


def _is_absolute(platform: Platform, value: str) -> bool:
    if platform is Platform.WINDOWS:
        return PureWindowsPath(value).is_absolute()
    return PurePosixPath(value).is_absolute()


def cmd_doctor(args: argparse.Namespace) -> int:
    args.explain = True
    payload, _ = _resolve_from_args(args)
    platform = Platform.from_name(payload["platform"])
    failed = False
    sys.stderr.write(f"platform: {platform.value}\n")
    for name in FIELDS:
        value = payload["basedirs"][name]
        source = payload["sources"][name]
        if not value:
            sys.stderr.write(f"error: {name} is unresolved\n")
            failed = True
            continue
        if not _is_absolute(platform, value):
            sys.stderr.write(f"warning: {name} is not an absolute path ({source}): {value}\n")
        elif not args.quiet:
            sys.stderr.write(f"{name} ok ({source})\n")
    return 1 if failed else 0


def cmd_platforms(args: argparse.Namespace) -> int:
    try:
        host = detect_platform().value
    except BaseDirsError:
        host = None
    for name in platform_names():
        marker = " (host)" if name == host else ""
        sys.stdout.write(f"{name}{marker}\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    epilog = (
        "Examples:\n"
        "  basedirs show\n"
        "  basedirs show --platform macos --format json\n"
        "  basedirs show --clean-env --env HOME=/home/alice --explain\n"
        "  basedirs get config\n"
        "  basedirs doctor\n"
    )
    parser = argparse.ArgumentParser(
        prog="basedirs",
        description="Resolve per-user XDG base directories and their platform equivalents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="Path to config file (or set BASEDIRS_CONFIG)")
    common.add_argument("--quiet", action="store_true", help="Suppress warnings and progress output")

    resolve_group = argparse.ArgumentParser(add_help=False)
    resolve_group.add_argument("--platform", help="Platform to resolve for (default: host)")
    resolve_group.add_argument("--env", action="append", default=[], help="Environment override KEY=VALUE")
    resolve_group.add_argument("--clean-env", action="store_true", help="Ignore the process environment")
    resolve_group.add_argument("--passwd", help="User database used when HOME is unset")
    resolve_group.add_argument(
        "--magnitude",
        choices=["user", "system"],
        default="user",
        help="Lookup scope (only user is supported)",
    )
    resolve_group.add_argument("--explain", action="store_true", help="Show where each value came from")

    show_cmd = sub.add_parser("show", parents=[common, resolve_group], help="Print all base directories")
    show_cmd.add_argument("--format", choices=["text", "json", "yaml"], help="Output format")
    show_cmd.set_defaults(func=cmd_show)

    get_cmd = sub.add_parser("get", parents=[common, resolve_group], help="Print a single base directory")
    get_cmd.add_argument("field", choices=list(FIELDS))
    get_cmd.set_defaults(func=cmd_get)

    init_cmd = sub.add_parser("init", parents=[common], help="Write the default config")
    init_cmd.add_argument("--force", action="store_true", help="Overwrite config if it exists")
    init_cmd.set_defaults(func=cmd_init)

    validate_cmd = sub.add_parser("validate", parents=[common], help="Validate config")
    validate_cmd.set_defaults(func=cmd_validate)

    doctor_cmd = sub.add_parser("doctor", parents=[common, resolve_group], help="Report unresolved directories")
    doctor_cmd.set_defaults(func=cmd_doctor)

    platforms_cmd = sub.add_parser("platforms", help="List supported platforms")
    platforms_cmd.set_defaults(func=cmd_platforms)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except BaseDirsError as exc:
        sys.stderr.write(f"error: {exc}\n")
        if exc.hint:
            sys.stderr.write(f"hint: {exc.hint}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
