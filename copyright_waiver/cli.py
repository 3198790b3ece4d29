"""Command-line entry point."""

import argparse
import logging
import sys

from copyright_waiver.cancellation import CancellationToken, install_interrupt_handler
from copyright_waiver.client import ForgeClient
from copyright_waiver.config import WaiverConfig
from copyright_waiver.credentials import SSHCredentials
from copyright_waiver.exceptions import (
    AuthError,
    ConfigurationError,
    WaiverError,
    WorkspaceError,
)
from copyright_waiver.git import GitHelper
from copyright_waiver.logging import configure_logging, get_logger
from copyright_waiver.resolver import LicenseResolver
from copyright_waiver.runner import WaiverRun
from copyright_waiver.types.runs import ExitCode
from copyright_waiver.workspace import Workspace

logger = get_logger()

USAGE = (
    "Usage: \n"
    "  copyright-waiver --name <YOUR GITHUB USERNAME> --ssh-key <PATH TO YOUR SSH KEY>\n"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="copyright-waiver",
        description=(
            "Replace the license of every repository you own with a "
            "public-domain-equivalent license (the Unlicense)."
        ),
    )
    parser.add_argument("--name", "-name", default="", help="Specify username.")
    parser.add_argument("--ssh-key", "-ssh-key", default="", help="Specify path to SSH key.")
    parser.add_argument(
        "--workspace",
        default=None,
        help="Directory under which each run creates, then removes, its own clone directory",
    )
    parser.add_argument("--author-name", default=None, help="Commit author/committer name")
    parser.add_argument("--author-email", default=None, help="Commit author/committer email")
    parser.add_argument("--api-url", default=None, help="Forge API base URL")
    parser.add_argument("--depth", type=int, default=None, help="Shallow clone depth")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log HTTP and git commands")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if not args.name or not args.ssh_key:
        sys.stderr.write(USAGE)
        return ExitCode.USAGE

    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = WaiverConfig.from_args(args)
        credentials = SSHCredentials.from_file(config.ssh_key)
    except ConfigurationError as e:
        logger.error("%s", e.message)
        sys.stderr.write(USAGE)
        return ExitCode.USAGE
    except AuthError as e:
        logger.error("%s", e.message)
        return ExitCode.FATAL

    try:
        workspace = Workspace.claim(config.workspace_root)
    except WorkspaceError as e:
        logger.error("%s", e.message)
        return ExitCode.FATAL

    token = CancellationToken()
    restore_interrupt = install_interrupt_handler(token)
    try:
        with ForgeClient(
            base_url=config.api_url,
            token=config.api_token,
            timeout=config.timeout,
        ) as forge:
            run = WaiverRun(
                username=config.username,
                repos=forge.repos,
                resolver=LicenseResolver(forge.licenses),
                workspace=workspace,
                git=GitHelper(depth=config.clone_depth),
                credentials=credentials,
                identity=config.identity,
                token=token,
            )
            try:
                summary = run.run()
            except WaiverError as e:
                logger.error("Run aborted: %s", e)
                if run.summary.outcomes:
                    print(run.summary.format())
                return ExitCode.FATAL
    finally:
        restore_interrupt()

    print(summary.format())
    return summary.exit_code
