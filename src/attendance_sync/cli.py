"""Command line entrypoint: sample, settings, submit and an interactive dashboard."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

from .client import AttendanceApiClient
from .clock import CandidateTimes
from .config import Config, load_config
from .console import SyncConsole
from .credentials import CredentialStore
from .errors import AttendanceSyncError
from .formatting import display_date, is_valid_date, today_string
from .history import HistoryLog
from .logger import logger, set_log_profile, spinner, step
from .models import Credentials, EventKind, Outcome, Success
from .service import SubmissionService
from .session import Session


def _date_arg(value: str) -> str:
    if not is_valid_date(value):
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")
    return value


def _kind_arg(value: str) -> EventKind:
    try:
        return EventKind.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="attendance-sync",
        description="Submit check-in/check-out events to the HR attendance API",
    )
    parser.add_argument("--env-file", help="Path to the .env file (default: $ENV_FILE or .env)")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    sample_cmd = commands.add_parser("sample", help="Show candidate check-in/check-out times")
    sample_cmd.add_argument("--date", type=_date_arg, help="Attendance day (YYYY-MM-DD)")

    settings_cmd = commands.add_parser("settings", help="Save Basic Auth and token")
    settings_cmd.add_argument("--basic-auth", help="Value placed after 'Basic ' in the Authorization header")
    settings_cmd.add_argument("--token", help="Access token sent in the 'token' header")
    settings_cmd.add_argument("--yes", action="store_true", help="Save without asking for confirmation")

    submit_cmd = commands.add_parser("submit", help="Submit one attendance event")
    submit_cmd.add_argument("--user-id", help="HR user ID (default: $USER_ID)")
    submit_cmd.add_argument("--username", help="HR username (default: $USERNAME)")
    submit_cmd.add_argument("--date", type=_date_arg, help="Attendance day, default today")
    submit_cmd.add_argument("--kind", type=_kind_arg, default=EventKind.CHECK_IN, help="in or out (default: in)")
    submit_cmd.add_argument("--time", help="HH:MM:SS, default a random plausible time")

    dashboard_cmd = commands.add_parser("dashboard", help="Interactive session with history")
    dashboard_cmd.add_argument("--user-id", help="HR user ID (default: $USER_ID)")
    dashboard_cmd.add_argument("--username", help="HR username (default: $USERNAME)")
    return parser


def _build_session(config: Config, user_id: str, username: str, date: Optional[str] = None) -> Session:
    service = SubmissionService(
        AttendanceApiClient(config.API_BASE_URL),
        HistoryLog(config.HISTORY_LIMIT),
    )
    return Session(
        user_id,
        username,
        service=service,
        credential_store=CredentialStore(config.CREDENTIALS_FILE),
        date=date,
    )


async def _submit_with_spinner(session: Session) -> Outcome:
    async with spinner(f"Submitting {session.kind.label} {session.custom_time}") as status:
        outcome = await session.submit()
        if not isinstance(outcome, Success):
            status.fail(outcome.message)
    return outcome


def _cmd_sample(args: argparse.Namespace, console: SyncConsole) -> int:
    candidates = CandidateTimes(args.date or today_string())
    console.headline(display_date(candidates.date))
    console.candidates(
        candidates.for_kind(EventKind.CHECK_IN),
        candidates.for_kind(EventKind.CHECK_OUT),
    )
    return 0


def _prompt_credentials(console: SyncConsole, current: Credentials) -> Credentials:
    basic_auth = console.secret("Basic Auth:") or current.basic_auth
    token = console.secret("Token:") or current.access_token
    return Credentials(basic_auth=basic_auth, access_token=token)


def _cmd_settings(args: argparse.Namespace, config: Config, console: SyncConsole) -> int:
    store = CredentialStore(config.CREDENTIALS_FILE)
    current = store.load()
    if args.basic_auth is None and args.token is None:
        credentials = _prompt_credentials(console, current)
    else:
        credentials = Credentials(
            basic_auth=args.basic_auth if args.basic_auth is not None else current.basic_auth,
            access_token=args.token if args.token is not None else current.access_token,
        )
    if not args.yes and not console.confirm(f"Save credentials to {store.path}?"):
        console.text_block("Nothing saved.", tone="yellow")
        return 1
    store.save(credentials)
    console.text_block(f"Credentials saved to {store.path}.", tone="green")
    return 0


def _cmd_submit(args: argparse.Namespace, config: Config, console: SyncConsole) -> int:
    user_id = args.user_id or config.USER_ID
    username = args.username or config.USERNAME
    session = _build_session(config, user_id, username, date=args.date)
    session.select_kind(args.kind)
    if args.time is not None:
        session.edit_time(args.time)
    step(f"{session.kind.label} on {display_date(session.date)} at {session.custom_time}")
    outcome = asyncio.run(_submit_with_spinner(session))
    console.outcome(outcome)
    if session.settings_requested:
        console.text_block("Run `attendance-sync settings` to configure Basic Auth and token.", tone="yellow")
    return 0 if isinstance(outcome, Success) else 1


def _dashboard_loop(session: Session, console: SyncConsole) -> None:
    options = [
        "Choose date",
        "Toggle check-in/check-out",
        "Edit time",
        "Submit",
        "Settings (Basic Auth / token)",
        "Show history",
    ]
    while True:
        console.status(
            date=session.date,
            kind=session.kind,
            time=session.custom_time,
            time_valid=session.time_is_valid,
        )
        candidates = session.candidates
        console.candidates(
            candidates.for_kind(EventKind.CHECK_IN),
            candidates.for_kind(EventKind.CHECK_OUT),
        )
        choice = console.prompt_menu(f"{session.username} ({session.user_id})", options)
        if choice is None:
            return
        if choice == 0:
            value = console.prompt("Date (YYYY-MM-DD):", default=session.date)
            if is_valid_date(value):
                session.select_date(value)
            else:
                console.text_block(f"{value!r} is not a valid date.", tone="red")
        elif choice == 1:
            other = EventKind.CHECK_OUT if session.kind is EventKind.CHECK_IN else EventKind.CHECK_IN
            session.select_kind(other)
        elif choice == 2:
            if not session.edit_time(console.prompt("Time (HH:MM:SS):", default=session.custom_time)):
                console.text_block("Expected HH:MM:SS, for example 08:30:00.", tone="red")
        elif choice == 3:
            if not session.time_is_valid:
                console.text_block("Fix the time before submitting.", tone="red")
                continue
            outcome = asyncio.run(_submit_with_spinner(session))
            console.outcome(outcome)
            if session.settings_requested:
                _dashboard_settings(session, console)
        elif choice == 4:
            _dashboard_settings(session, console)
        elif choice == 5:
            console.history(session.history)


def _dashboard_settings(session: Session, console: SyncConsole) -> None:
    credentials = _prompt_credentials(console, session.credentials)
    if console.confirm("Save configuration?"):
        session.save_credentials(credentials)


def _cmd_dashboard(args: argparse.Namespace, config: Config, console: SyncConsole) -> int:
    user_id = args.user_id or config.USER_ID or console.prompt("User ID:")
    username = args.username or config.USERNAME or console.prompt("Username:")
    session = _build_session(config, user_id, username)
    _dashboard_loop(session, console)
    step("Logged out")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.debug:
        set_log_profile("debug")
    console = SyncConsole()
    try:
        config = load_config(args.env_file)
        if args.command == "sample":
            return _cmd_sample(args, console)
        if args.command == "settings":
            return _cmd_settings(args, config, console)
        if args.command == "submit":
            return _cmd_submit(args, config, console)
        return _cmd_dashboard(args, config, console)
    except (AttendanceSyncError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
