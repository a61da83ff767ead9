#!/usr/bin/env python3
"""
Main entry point for the Google Drive mirror CLI.
"""

import sys
import logging
import argparse

from google.auth.exceptions import GoogleAuthError

from gdrive_mirror.cli.auth import authorize, consent_url
from gdrive_mirror.cli.upload import upload
from gdrive_mirror.config import Settings
from gdrive_mirror.exceptions import GDriveMirrorError


def build_parser():
    parser = argparse.ArgumentParser(
        description='Google Drive Mirror - upload folders to Google Drive'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug logging'
    )
    parser.add_argument(
        '--token-file',
        help='Where OAuth tokens are cached (default: token.pickle)'
    )
    parser.add_argument(
        '--credentials-file',
        help='OAuth client secrets file (default: credentials.json)'
    )
    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    upload_parser = subparsers.add_parser('upload', help='Mirror a folder to Google Drive')
    upload_parser.add_argument(
        'folder_path',
        help='Path to the folder to upload'
    )
    upload_parser.add_argument(
        '--parent-id',
        help='ID of the parent folder in Google Drive (optional)'
    )
    upload_parser.add_argument(
        '--contents-only',
        action='store_true',
        help='Upload the folder contents directly under the parent folder'
    )

    subparsers.add_parser('consent-url', help='Print the OAuth consent page URL')

    authorize_parser = subparsers.add_parser(
        'authorize', help='Exchange an authorization code for a stored token')
    authorize_parser.add_argument(
        'code',
        help='Code returned to the redirect URL after consent'
    )
    return parser


def main(argv=None):
    """Main function to parse arguments and dispatch to the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    if args.command is None:
        parser.print_help()
        return 1

    try:
        settings = Settings.from_env().with_overrides(
            token_file=args.token_file,
            credentials_file=args.credentials_file,
        )
        if args.command == 'upload':
            return upload(args.folder_path, settings, args.parent_id, args.contents_only)
        elif args.command == 'consent-url':
            return consent_url(settings)
        return authorize(args.code, settings)
    except GDriveMirrorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except GoogleAuthError as e:
        print(f"Authorization failed: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\nUpload process interrupted by user.", file=sys.stderr)
        print("Partial content may have been uploaded.", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
