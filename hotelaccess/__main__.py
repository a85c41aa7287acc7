"""CLI for inspecting and validating the dashboard access policy.

Usage:
    python -m hotelaccess validate [--policy FILE]
    python -m hotelaccess menu ROLE [--policy FILE]
    python -m hotelaccess check-route ROLE PATH [--policy FILE]
    python -m hotelaccess explain ROLE PATH [--policy FILE]
    python -m hotelaccess check-permission ROLE KEY [--policy FILE]
    python -m hotelaccess export [--policy FILE]
    python -m hotelaccess token USER_ID ROLE [--minutes N]
    python -m hotelaccess serve [--host HOST] [--port PORT]

--policy may also be given before the subcommand.

Exit codes: 0 allowed/valid, 1 denied/invalid, 2 usage or configuration error.
"""

import argparse
import sys
from datetime import timedelta
from typing import List, Optional

import yaml

from hotelaccess.common.logger import VALID_LEVELS, setup_logger
from hotelaccess.core.rbac import (
    DEFAULT_POLICY,
    AccessPolicy,
    PolicyError,
    can_access_route,
    describe_policy,
    get_navigation_for_role,
    has_permission,
    match_route,
    parse_role,
    validate_policy,
)
from hotelaccess.core.rbac.loader import load_policy_file

EXIT_OK = 0
EXIT_DENIED = 1
EXIT_USAGE = 2

POLICY_HELP = "YAML policy file (default: built-in policy)"


def _load(policy_path: Optional[str]) -> AccessPolicy:
    if policy_path:
        return load_policy_file(policy_path)
    return DEFAULT_POLICY


def cmd_validate(args: argparse.Namespace) -> int:
    try:
        policy = _load(args.policy)
    except PolicyError as e:
        for problem in e.problems:
            print(f"ERROR: {problem}")
        return EXIT_DENIED
    problems = validate_policy(policy)
    if problems:
        for problem in problems:
            print(f"ERROR: {problem}")
        return EXIT_DENIED
    print(f"OK: {policy.source} policy is consistent ({len(policy.rulesets)} roles)")
    return EXIT_OK


def cmd_menu(args: argparse.Namespace) -> int:
    policy = _load(args.policy)
    if parse_role(args.role) is None:
        print(f"Unknown role '{args.role}', showing the guest menu", file=sys.stderr)
    for item in get_navigation_for_role(args.role, policy):
        print(f"{item.title:<24} {item.href}")
        for child in item.submenu:
            print(f"  - {child.title:<20} {child.href}")
    return EXIT_OK


def cmd_check_route(args: argparse.Namespace) -> int:
    allowed = can_access_route(args.role, args.path, _load(args.policy))
    print("allowed" if allowed else "denied")
    return EXIT_OK if allowed else EXIT_DENIED


def cmd_explain(args: argparse.Namespace) -> int:
    pattern = match_route(args.role, args.path, _load(args.policy))
    if pattern is None:
        print(f"denied: no route pattern of role '{args.role}' matches {args.path}")
        return EXIT_DENIED
    print(f"allowed: {args.path} matches {pattern}")
    return EXIT_OK


def cmd_check_permission(args: argparse.Namespace) -> int:
    granted = has_permission(args.role, args.permission, _load(args.policy))
    print("granted" if granted else "denied")
    return EXIT_OK if granted else EXIT_DENIED


def cmd_export(args: argparse.Namespace) -> int:
    policy = _load(args.policy)
    print(yaml.safe_dump({"roles": describe_policy(policy)}, sort_keys=False), end="")
    return EXIT_OK


def cmd_token(args: argparse.Namespace) -> int:
    from hotelaccess.core.security import create_access_token

    if parse_role(args.role) is None:
        print(f"Unknown role: {args.role}", file=sys.stderr)
        return EXIT_USAGE
    print(create_access_token(args.user_id, args.role, timedelta(minutes=args.minutes)))
    return EXIT_OK


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("hotelaccess.api.main:app", host=args.host, port=args.port)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hotelaccess",
        description="Inspect and validate the hotel dashboard access policy",
    )
    parser.add_argument("--policy", help=POLICY_HELP)
    parser.add_argument("--log-level", default="WARNING", choices=VALID_LEVELS)

    # Accepted after the subcommand too; SUPPRESS keeps a value given before it
    policy_opts = argparse.ArgumentParser(add_help=False)
    policy_opts.add_argument("--policy", default=argparse.SUPPRESS, help=POLICY_HELP)

    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser(
        "validate", parents=[policy_opts], help="Check the policy invariants"
    )
    p.set_defaults(func=cmd_validate)

    p = subparsers.add_parser(
        "menu", parents=[policy_opts], help="Print the navigation menu of a role"
    )
    p.add_argument("role")
    p.set_defaults(func=cmd_menu)

    p = subparsers.add_parser(
        "check-route", parents=[policy_opts], help="Check if a role may open a path"
    )
    p.add_argument("role")
    p.add_argument("path")
    p.set_defaults(func=cmd_check_route)

    p = subparsers.add_parser(
        "explain", parents=[policy_opts], help="Show which route pattern grants a path"
    )
    p.add_argument("role")
    p.add_argument("path")
    p.set_defaults(func=cmd_explain)

    p = subparsers.add_parser(
        "check-permission", parents=[policy_opts], help="Check a permission key for a role"
    )
    p.add_argument("role")
    p.add_argument("permission")
    p.set_defaults(func=cmd_check_permission)

    p = subparsers.add_parser(
        "export", parents=[policy_opts], help="Print the policy as a YAML policy file"
    )
    p.set_defaults(func=cmd_export)

    p = subparsers.add_parser("token", help="Issue a session token for local testing")
    p.add_argument("user_id")
    p.add_argument("role")
    p.add_argument("--minutes", type=int, default=30)
    p.set_defaults(func=cmd_token)

    p = subparsers.add_parser("serve", help="Run the access API")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the access CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logger("hotelaccess", level=args.log_level)

    try:
        return args.func(args)
    except (FileNotFoundError, TypeError, yaml.YAMLError, PolicyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
