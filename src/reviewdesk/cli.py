"""Command-line interface for ReviewDesk."""

import argparse
import json
import logging
import subprocess
import sys
from pathlib import Path

from .core.config import settings
from .core.constants import FileConstants
from .core.errors import ReviewDeskError
from .core.models import ReviewQuery
from .services.review_service import ReviewService
from .utils.data_prep import export_to_json, format_rating, prepare_export, sort_newest_first

logger = logging.getLogger(__name__)


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=FileConstants.LOG_FORMAT
    )


def _query_from_args(args) -> ReviewQuery:
    return ReviewQuery(
        listing_id=args.listing_id,
        channel=args.channel,
        type=args.type,
        approved_only="true" if args.approved_only else None,
        min_rating=args.min_rating,
        start_date=args.start_date,
        end_date=args.end_date,
    )


def cmd_fetch(args):
    """Fetch command."""
    service = ReviewService()
    response = service.list_reviews(_query_from_args(args), use_mock=args.mock)
    totals = response["totals"]

    print(f"Showing {response['count']} of {totals['all']} reviews ({totals['approved']} approved)")
    print("Channels: " + ", ".join(f"{k}: {v}" for k, v in totals["byChannel"].items()))

    for review in sort_newest_first(response["result"]):
        status = "Approved" if review["approved"] else "Pending"
        date = (review["submittedAt"] or "-")[:10]
        print(f"  [{review['id']}] {date} {format_rating(review):>7} {review['channel']:<12} "
              f"{status:<8} {review['listingName']}")

    if args.out:
        export_to_json(prepare_export(response), args.out)
        print(f"Results exported to {args.out}")


def cmd_approvals(args):
    """Approvals command."""
    service = ReviewService()
    print(json.dumps(service.list_approvals(), indent=2))


def cmd_approve(args):
    """Approve command."""
    service = ReviewService()
    record = service.set_approval(args.review_id, not args.reject, args.listing_id)
    verb = "Approved" if record.approved else "Unapproved"
    print(f"{verb} review {args.review_id} at {record.updated_at}")


def cmd_serve(args):
    """Serve command."""
    import uvicorn

    uvicorn.run("reviewdesk.api.app:app", host=args.host, port=args.port, reload=args.reload)


def cmd_ui(args):
    """UI command."""
    app_path = Path(__file__).parent / "ui" / "streamlit_app.py"

    if not app_path.exists():
        print(f"Streamlit app not found at {app_path}")
        return

    print("Launching ReviewDesk UI...")
    try:
        subprocess.run([
            sys.executable, "-m", "streamlit", "run", str(app_path)
        ], check=True)
    except subprocess.CalledProcessError as e:
        print(f"Failed to launch UI: {e}")
    except KeyboardInterrupt:
        print("\nUI stopped by user")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ReviewDesk - Guest Review Moderation")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Fetch command
    fetch_parser = subparsers.add_parser('fetch', help='Fetch normalized reviews')
    fetch_parser.add_argument('--listing-id', help='Listing id or listing name slug')
    fetch_parser.add_argument('--channel', help='Comma-separated channels')
    fetch_parser.add_argument('--type', help='Comma-separated review types')
    fetch_parser.add_argument('--approved-only', action='store_true', help='Only approved reviews')
    fetch_parser.add_argument('--min-rating', help='Minimum overall rating (0-5)')
    fetch_parser.add_argument('--start-date', help='Earliest submission date')
    fetch_parser.add_argument('--end-date', help='Latest submission date')
    fetch_parser.add_argument('--mock', action='store_true', help='Use the mock Hostaway payload')
    fetch_parser.add_argument('--out', help='Export the response to a JSON file')

    # Approvals command
    subparsers.add_parser('approvals', help='List stored approvals')

    # Approve command
    approve_parser = subparsers.add_parser('approve', help='Approve or unapprove a review')
    approve_parser.add_argument('review_id', help='Review id')
    approve_parser.add_argument('--reject', action='store_true', help='Unapprove instead')
    approve_parser.add_argument('--listing-id', help='Listing id to store with the decision')

    # Serve command
    serve_parser = subparsers.add_parser('serve', help='Run the HTTP API')
    serve_parser.add_argument('--host', default=settings.host, help='Bind address')
    serve_parser.add_argument('--port', type=int, default=settings.port, help='Port')
    serve_parser.add_argument('--reload', action='store_true', help='Reload on code changes')

    # UI command
    subparsers.add_parser('ui', help='Launch moderation dashboard')

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging()

    commands = {
        'fetch': cmd_fetch,
        'approvals': cmd_approvals,
        'approve': cmd_approve,
        'serve': cmd_serve,
        'ui': cmd_ui,
    }

    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
    except ReviewDeskError as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)
