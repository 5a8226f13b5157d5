"""
Console front-end: ``python -m timesheet_vault`` or ``timesheet-vault``.
"""

import argparse
import asyncio
import sys

import structlog

from timesheet_vault.client import TimesheetVaultClient
from timesheet_vault.config import VaultConfig
from timesheet_vault.logging_config import configure_logging
from timesheet_vault.ui.binder import UIBinder
from timesheet_vault.ui.view import ConsoleView

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timesheet-vault",
        description="Encrypt timesheet entries and save them to Google Drive.",
    )
    parser.add_argument("--client-id", help="OAuth client id (default: $TIMESHEET_VAULT_CLIENT_ID)")
    parser.add_argument("--folder", help="Drive folder name (default: HR_Attendance_Data)")
    parser.add_argument("--port", type=int, help="Loopback port for the OAuth redirect")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    return parser


def load_config(args: argparse.Namespace) -> VaultConfig:
    """Environment config overridden by command-line flags."""
    return VaultConfig.from_env(
        client_id=args.client_id,
        folder_name=args.folder,
        redirect_port=args.port,
    )


async def run(config: VaultConfig, view: ConsoleView) -> None:
    async with TimesheetVaultClient(config) as client:
        binder = UIBinder(view, client.auth, client.pipeline)
        binder.bind()

        while True:
            action = await asyncio.to_thread(view.choose_action)
            if action == "quit":
                break
            if action == "authorize":
                await binder.on_authorize_clicked()
            elif action == "save":
                await asyncio.to_thread(view.fill_form)
                await binder.on_save_clicked()
            elif action == "signout":
                await binder.on_sign_out_clicked()

        binder.unbind()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        configure_logging(args.log_level)
        config = load_config(args)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    try:
        asyncio.run(run(config, ConsoleView()))
    except (KeyboardInterrupt, EOFError):
        logger.debug("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
