"""
apisnap CLI

Command-line interface for capturing, comparing and snapshotting API
responses.

Commands:
    capture     - Capture normalized responses into before/ or after/
    compare     - Compare before/ against after/
    snapshot    - Write Jest snapshot files into responses/
    verify      - Check live responses against the stored snapshots

Examples:
    # Baseline, change the API, capture again, compare
    apisnap capture
    apisnap capture after
    apisnap compare
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .capture import ApiClient, EndpointConfig, ResponseCapturer
from .common import ClientSettings, describe_headers
from .compare import compare_all
from .compare.comparator import print_summary
from .snapshot import SnapshotWriter

BEFORE_DIR = 'before'
AFTER_DIR = 'after'


def _load_config(path: str) -> EndpointConfig:
    try:
        return EndpointConfig.from_yaml(path)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Failed to load endpoints: {e}")
        sys.exit(1)


def _create_client() -> ApiClient:
    settings = ClientSettings.from_env()

    headers = describe_headers(settings.headers)
    if headers:
        print("🔑 Custom headers configured:")
        for key, value in headers.items():
            print(f"   {key}: {value}")
        print()

    return ApiClient(settings)


def cmd_capture(args):
    """
    Capture every endpoint into the output directory.

    Args:
        args: Parsed command-line arguments
    """
    config = _load_config(args.config)

    print("🌐 Testing APIs\n")
    print(f"📋 Total APIs to test: {len(config.endpoints)}\n")

    client = _create_client()
    try:
        summary = ResponseCapturer(client, args.output_dir).capture_all(config.endpoints)
    finally:
        client.close()

    if summary.error_count > 0:
        sys.exit(1)


def cmd_compare(args):
    """
    Compare before/ with after/ and exit with the comparison result.

    Args:
        args: Parsed command-line arguments
    """
    sys.exit(compare_all(BEFORE_DIR, AFTER_DIR))


def cmd_snapshot(args):
    """
    Write a .snap file per endpoint.

    Args:
        args: Parsed command-line arguments
    """
    config = _load_config(args.config)

    client = _create_client()
    try:
        writer = SnapshotWriter(client, output_dir=args.output_dir, suite=config.suite)
        summary = writer.write_all(config.endpoints)
    finally:
        client.close()

    if summary.error_count > 0:
        sys.exit(1)


def cmd_verify(args):
    """
    Re-fetch every endpoint and diff it against its stored snapshot.

    Args:
        args: Parsed command-line arguments
    """
    config = _load_config(args.config)

    print(f"\n🔍 Verifying API responses against {args.output_dir}/\n")

    client = _create_client()
    try:
        writer = SnapshotWriter(client, output_dir=args.output_dir, suite=config.suite)
        report = writer.verify_all(config.endpoints)
    finally:
        client.close()

    print_summary(report)
    sys.exit(report.exit_code)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='apisnap',
        description="apisnap - Capture API responses and detect regressions between runs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Capture the baseline into before/
  %(prog)s capture

  # Capture after a change, then compare
  %(prog)s capture after
  %(prog)s compare

  # Write Jest snapshot files and check them later
  %(prog)s snapshot
  %(prog)s verify

Environment:
  ACCESS_TOKEN     Bearer token sent as Authorization header
  CUSTOM_HEADERS   JSON object merged into request headers
  API_BASE_URL     Prefix for relative endpoint URLs
        """
    )
    parser.add_argument('--log-level', default='warning', choices=['debug', 'info', 'warning', 'error'],
                        help='Log level (default: warning)')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # --- CAPTURE command ---
    capture_parser = subparsers.add_parser('capture', help='Capture normalized API responses')
    capture_parser.add_argument('output_dir', nargs='?', default=BEFORE_DIR,
                                help='Output directory (default: before)')
    capture_parser.add_argument('-c', '--config', default='endpoints.yaml',
                                help='Endpoint configuration YAML (default: endpoints.yaml)')

    # --- COMPARE command ---
    subparsers.add_parser('compare', help='Compare before/ against after/')

    # --- SNAPSHOT command ---
    snapshot_parser = subparsers.add_parser('snapshot', help='Write Jest snapshot files')
    snapshot_parser.add_argument('-c', '--config', default='endpoints.yaml',
                                 help='Endpoint configuration YAML (default: endpoints.yaml)')
    snapshot_parser.add_argument('-o', '--output-dir', default='responses',
                                 help='Snapshot directory (default: responses)')

    # --- VERIFY command ---
    verify_parser = subparsers.add_parser('verify', help='Check live responses against stored snapshots')
    verify_parser.add_argument('-c', '--config', default='endpoints.yaml',
                               help='Endpoint configuration YAML (default: endpoints.yaml)')
    verify_parser.add_argument('-o', '--output-dir', default='responses',
                               help='Snapshot directory (default: responses)')

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format='%(levelname)s %(name)s: %(message)s'
    )
    load_dotenv(find_dotenv(usecwd=True))

    # Dispatch to command handler
    if args.command == 'capture':
        cmd_capture(args)
    elif args.command == 'compare':
        cmd_compare(args)
    elif args.command == 'snapshot':
        cmd_snapshot(args)
    elif args.command == 'verify':
        cmd_verify(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == '__main__':
    main()
