from __future__ import annotations

import argparse
from pathlib import Path

from . import __version__, sysfs, workflow
from .model import EppProfile


def _profile_help_epilog() -> str:
    lines: list[str] = ["EPP Profiles Explanations:"]
    for p in EppProfile:
        lines.append(f"- {p.cli_name}")
        lines.extend(f"  {ln}" for ln in p.description.splitlines())
    return "\n".join(lines)


def _positive_int(s: str) -> int:
    try:
        v = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {s!r}") from None
    if v < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {v}")
    return v


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser for the EPP manager."""
    parser = argparse.ArgumentParser(
        prog="amd-epp",
        description="Manage AMD Energy Performance Preference (EPP) settings.",
        epilog=_profile_help_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    action = parser.add_mutually_exclusive_group(required=True)
    for p in EppProfile:
        action.add_argument(
            f"--{p.cli_name}",
            dest="profile_name",
            action="store_const",
            const=p.cli_name,
            help=f"Set EPP profile to '{p.cli_name}'.",
        )
    action.add_argument(
        "-p",
        dest="level",
        type=int,
        metavar="LEVEL",
        choices=[p.level for p in EppProfile],
        help="Set EPP profile by level. 0=performance, 1=balance-performance, 2=balance-power, 3=power",
    )
    action.add_argument("-s", "--show", action="store_true", help="Show current EPP values for all CPU cores.")

    parser.add_argument("--json", action="store_true", help="With --show: print a JSON snapshot instead of text.")
    parser.add_argument(
        "--columns",
        type=_positive_int,
        default=None,
        help="With --show: number of columns in the text listing (default: 1).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_profile(ns: argparse.Namespace) -> EppProfile | None:
    """Return the profile selected by a set action, or None for --show."""
    if ns.profile_name is not None:
        return EppProfile.from_cli_name(ns.profile_name)
    if ns.level is not None:
        return EppProfile.from_level(ns.level)
    return None


def main(argv: list[str] | None = None, *, sysfs_root: Path = sysfs.DEFAULT_SYSFS_ROOT) -> int:
    """CLI entrypoint. Returns process exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    if not ns.show and (ns.json or ns.columns is not None):
        parser.error("--json and --columns require --show")
    if ns.json and ns.columns is not None:
        parser.error("--json and --columns are mutually exclusive")

    if ns.show:
        return workflow.show_run(sysfs_root=sysfs_root, columns=ns.columns or 1, as_json=ns.json)

    profile = resolve_profile(ns)
    if profile is None:
        raise AssertionError("Unhandled action")
    return workflow.set_run(profile, sysfs_root=sysfs_root)


if __name__ == "__main__":
    raise SystemExit(main())
