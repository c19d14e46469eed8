# main.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Main entry point for the cryptobatch CLI application."""

import argparse
import sys
import logging

from .cli.handlers import handle_encrypt, handle_decrypt
from .utils.constants import EXIT_SUCCESS, EXIT_GENERIC_ERROR, EXIT_ARG_ERROR, EXIT_INTERRUPT, DEFAULT_WORKERS


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid worker count: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"worker count must be at least 1, got {number}")
    return number


def _add_batch_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument('-i', '--input', required=True, metavar='DIR', help='Input directory (files directly inside it are processed).')
    subparser.add_argument('-o', '--output', required=True, metavar='DIR', help='Output directory (created if missing).')
    key_group = subparser.add_mutually_exclusive_group(required=True)
    key_group.add_argument('--key', type=str, metavar='HEX', help='32-byte key as 64 hex characters.')
    key_group.add_argument('--key-file', type=str, metavar='FILE', help='File containing the key (32 raw bytes or 64 hex characters).')
    subparser.add_argument('-j', '--workers', type=_positive_int, default=DEFAULT_WORKERS, metavar='N', help=f'Number of worker threads (default: {DEFAULT_WORKERS}).')


class CLIArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with EXIT_ARG_ERROR."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_ARG_ERROR, f"{self.prog}: error: {message}\n")


def create_parser():
    """Creates and configures the argument parser."""
    parser = CLIArgumentParser(
        prog="cryptobatch",
        description="Batch AES-256-GCM encryption/decryption of every file in a directory.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  cryptobatch encrypt -i plain/ -o sealed/ --key 00112233...eeff
  cryptobatch decrypt -i sealed/ -o restored/ --key-file my.key -j 4
  cryptobatch -q encrypt -i plain/ -o sealed/ --key-file my.key
"""
    )
    parser.add_argument('-V', '--version', action='version', version='%(prog)s 0.1.0')

    # --- Logging Control Group ---
    log_level_group = parser.add_mutually_exclusive_group()
    log_level_group.add_argument(
        '-q', '--quiet',
        action='store_const',
        const=logging.ERROR,
        dest='log_level',
        help='Show only error messages.'
    )
    log_level_group.add_argument(
        '-v', '--verbose',
        action='store_const',
        const=logging.DEBUG,
        dest='log_level',
        help='Show detailed debug messages.'
    )
    parser.set_defaults(log_level=logging.INFO)

    # --- Subparsers ---
    subparsers = parser.add_subparsers(dest='command', help='Available commands (encrypt/decrypt)', required=True)

    parser_encrypt = subparsers.add_parser('encrypt', help='Encrypt every file of a directory.')
    _add_batch_arguments(parser_encrypt)
    parser_encrypt.set_defaults(func=handle_encrypt)

    parser_decrypt = subparsers.add_parser('decrypt', help='Decrypt every file of a directory.')
    _add_batch_arguments(parser_decrypt)
    parser_decrypt.set_defaults(func=handle_decrypt)

    return parser


def main():
    """Main execution function: parses arguments, sets up logging, and calls the appropriate handler."""
    parser = create_parser()
    exit_code = EXIT_SUCCESS

    try:
        args = parser.parse_args()

        # --- Configure Logging ---
        log_level = args.log_level
        log_format = '%(asctime)s - %(levelname)s - %(message)s'
        if log_level <= logging.DEBUG:
            log_format = '%(asctime)s - %(levelname)s - %(threadName)s - [%(name)s:%(lineno)d] - %(message)s'

        # `force=True` replaces any existing root handlers
        logging.basicConfig(level=log_level, format=log_format, stream=sys.stderr, force=True)

        logging.debug(f"Log level set to: {logging.getLevelName(log_level)}")
        logging.debug(f"Command: {args.command}")
        # Never log args as a whole: it may carry the key

        exit_code = args.func(args)

    except SystemExit as e:
        # argparse help/version/usage errors
        exit_code = e.code if e.code is not None else EXIT_SUCCESS
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        exit_code = EXIT_INTERRUPT
    except Exception as e:
        logging.critical(f"An unhandled exception reached main: {e}", exc_info=True)
        print(f"\nCritical Error: An unexpected error occurred. Use --verbose for more details or check logs.", file=sys.stderr)
        exit_code = EXIT_GENERIC_ERROR
    finally:
        logging.debug(f"Exiting with code: {exit_code}")
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
