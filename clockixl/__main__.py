"""Main module for the clockiXL package."""
import os
import sys
import logging
import argparse
from datetime import date
from typing import Optional, List
from dotenv import load_dotenv

from . import actions
from .api.client import DEFAULT_BASE_URL
from .errors import ValidationError
from .keystore import KeyStore
from .reports.report_generator import ReportGenerator
from .session import Session
from .utils.date_utils import parse_date, default_range, day_str
from .utils.file_utils import write_markdown

# --- Environment Setup ---
def load_environment():
    """Load environment variables from the clockixl.env file, if there is one."""
    env_file = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'clockixl.env')
    if os.path.exists(env_file):
        load_dotenv(env_file)

def resolve_api_key(cli_key: Optional[str], store: KeyStore) -> str:
    """Pick the API key from the command line, the environment or the key store.

    Args:
        cli_key: Key given with --api-key
        store: Saved key store

    Returns:
        API key, or an empty string if none is available
    """
    return (cli_key or os.getenv("CLOCKIFY_API_KEY") or store.get() or "").strip()

# --- CLI Logic ---
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Export Clockify time entries to a spreadsheet.",
        epilog="""
Examples:
    # List your workspaces with their IDs
  clockixl --list
    ---
    # Show entries for a custom range and write an Excel file to ./exports
  clockixl --workspace 5f1c... --start 2025-04-25 --end 2025-05-25 --xlsx exports
    ---
    # Same, without task descriptions, as CSV
  clockixl --workspace 5f1c... --no-task --csv exports
    ---
    # Remember an API key, or serve the key store on http://127.0.0.1:3000
  clockixl --save-key YOUR_KEY
  clockixl --serve

""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        prog="clockixl"
    )
    parser.add_argument('-l', '--list', action='store_true', help='List workspaces with their IDs')
    parser.add_argument('--api-key', help='Clockify API key (default: CLOCKIFY_API_KEY or the saved key)')
    parser.add_argument('--workspace', help='Workspace ID (default: CLOCKIFY_WORKSPACE_ID)')
    parser.add_argument('--start', help='Start date (YYYY-MM-DD, default: the 25th of last month)')
    parser.add_argument('--end', help='End date (YYYY-MM-DD, default: the 25th of this month)')
    parser.add_argument('--no-task', action='store_true', help='Leave the Task column blank')
    parser.add_argument('--xlsx', metavar='DIR', help='Export to an Excel file in DIR')
    parser.add_argument('--csv', metavar='DIR', help='Export to a CSV file in DIR')
    parser.add_argument('--md', help='Write the table as markdown to the given file path')
    parser.add_argument('--overwrite', action='store_true', help='Overwrite the markdown file if it exists')
    parser.add_argument('--save-key', metavar='KEY', help='Save an API key to the key store and exit')
    parser.add_argument('--delete-key', action='store_true', help='Delete the saved API key and exit')
    parser.add_argument('--serve', action='store_true', help='Serve the key store HTTP API')
    parser.add_argument('--host', default='127.0.0.1', help='Host for --serve (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, default=3000, help='Port for --serve (default: 3000)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug logging')
    return parser.parse_args(argv)

def report(outcome: actions.Outcome) -> int:
    """Print an action outcome.

    Returns:
        Exit status for the outcome
    """
    prefix = {actions.SUCCESS: "[SUCCESS]", actions.INFO: "[INFO]", actions.ERROR: "[ERROR]"}[outcome.level]
    print(f"{prefix} {outcome.message}", file=sys.stderr if not outcome.ok else sys.stdout)
    return 0 if outcome.ok else 1

def list_workspaces(session: Session) -> int:
    """List the workspaces of the session's API key."""
    outcome = actions.check_workspaces(session)
    if outcome.ok:
        print("\nWorkspaces:")
        for ws in session.workspaces:
            print(f"  Name: {ws.name}, ID: {ws.id}")
    return report(outcome)

def export_interface(session: Session, start_str: Optional[str], end_str: Optional[str],
                     xlsx_dir: Optional[str] = None, csv_dir: Optional[str] = None,
                     md_path: Optional[str] = None, overwrite: bool = False) -> int:
    """Fetch, display and export the entries of a date range.

    Args:
        session: Current session
        start_str: Start date string (YYYY-MM-DD)
        end_str: End date string (YYYY-MM-DD)
        xlsx_dir: Directory for an Excel export
        csv_dir: Directory for a CSV export
        md_path: Path to export markdown
        overwrite: Whether to overwrite an existing markdown file

    Returns:
        Exit status
    """
    default_start, default_end = default_range(date.today())
    try:
        start_date = parse_date(start_str) if start_str else default_start
        end_date = parse_date(end_str) if end_str else default_end
    except ValueError as e:
        return report(actions.Outcome(actions.ERROR, f"Invalid date: {e}"))

    print(f"📅 Range: {day_str(start_date)} → {day_str(end_date)}")
    outcome = actions.fetch(session, start_date, end_date)
    if outcome.level != actions.SUCCESS:
        return report(outcome)

    print(f"📊 Found {session.result_set.count} time entries")
    date_range_str = f"{day_str(start_date)} to {day_str(end_date)}"
    table = ReportGenerator(session.result_set, date_range_str, session.include_task).generate_report()
    if md_path:
        try:
            write_markdown(md_path, f"\n{table}\n", start_date, end_date, overwrite)
        except OSError as e:
            return report(actions.Outcome(actions.ERROR, f"Failed to write to '{md_path}': {e}"))
        print(f"[SUCCESS] Markdown output written to '{md_path}'")
    else:
        print(table)
    status = report(outcome)

    for fmt, directory in (("xlsx", xlsx_dir), ("csv", csv_dir)):
        if directory:
            status = max(status, report(actions.export(session, directory, fmt)))
    return status

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    load_environment()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    store = KeyStore()
    if args.save_key is not None:
        try:
            store.save(args.save_key)
        except ValidationError as e:
            return report(actions.Outcome(actions.ERROR, e.message))
        return report(actions.Outcome(actions.SUCCESS, f"API key saved to {store.path}"))
    if args.delete_key:
        store.delete()
        return report(actions.Outcome(actions.SUCCESS, "API key deleted"))
    if args.serve:
        from .server import run_server
        run_server(host=args.host, port=args.port, store=store)
        return 0

    session = Session(
        credential=resolve_api_key(args.api_key, store),
        include_task=not args.no_task,
        base_url=os.getenv("CLOCKIFY_API_BASE") or DEFAULT_BASE_URL,
    )
    if args.list:
        return list_workspaces(session)

    workspace_id = args.workspace or os.getenv("CLOCKIFY_WORKSPACE_ID") or ""
    if not workspace_id:
        # a key with a single workspace needs no --workspace
        outcome = actions.check_workspaces(session)
        if not outcome.ok:
            return report(outcome)
        workspace_id = session.workspace_id
    try:
        session.select_workspace(workspace_id)
    except ValidationError as e:
        return report(actions.Outcome(actions.ERROR, f"{e.message} (see clockixl --list)"))
    return export_interface(session, args.start, args.end, args.xlsx, args.csv, args.md, args.overwrite)

if __name__ == "__main__":
    sys.exit(main())
