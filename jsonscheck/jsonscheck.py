"""

Command line utility to validate JSON documents against a JSON Schema.

"""


import argparse
import logging
import sys
from jsonscheck import _version
from jsonscheck.validate import validate


def create_parser():
    """Create the argument parser for the command line utility."""
    parser = argparse.ArgumentParser(description='Validate JSON documents against a JSON Schema.')
    parser.add_argument('--version', action='store_true', help='Print the version of jsonscheck.')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging.')

    subparsers = parser.add_subparsers(dest='command')
    validate_parser = subparsers.add_parser('validate', help='Validate JSON instance files against a schema.')
    validate_parser.add_argument('schema', type=str, help='Path to the JSON Schema file.')
    validate_parser.add_argument('input', type=str, nargs='+',
                                 help='JSON files to validate (single value or JSON Lines).')
    validate_parser.add_argument('--quiet', action='store_true',
                                 help='Suppress output, exit with code 0 if valid, 1 if invalid.')
    validate_parser.add_argument('--split-arrays', action='store_true',
                                 help='Validate each element of a root array as a separate instance.')
    return parser


def main(argv=None):
    """Main function for the command line utility."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, 'verbose', False) else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s')

    if getattr(args, 'version', False):
        print(f'jsonscheck {_version.version}')
        return

    if args.command is None:
        parser.print_help()
        return

    try:
        validate(input=args.input, schema=args.schema, quiet=args.quiet, split_arrays=args.split_arrays)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        print("Error: ", str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
