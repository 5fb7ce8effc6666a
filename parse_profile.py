#!/usr/bin/env python3
"""
Puppet Profile Parser - Command line interface
"""

import sys
import traceback
from profile_parser import LogParser, ParserConfig, __version__
from profile_parser.formatters import get_formatter
from profile_parser.processors import LogFileProcessor


def build_parser():
    import argparse
    parser = argparse.ArgumentParser(
        prog='puppet-profile-parser',
        usage='%(prog)s [options] puppetserver.log [...]',
        description='Parse Puppet Server logs for PROFILE data and transform it to other formats.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  puppet-profile-parser puppetserver.log
  puppet-profile-parser --format csv puppetserver.log puppetserver-2018-02-18.log.gz
  puppet-profile-parser --format flamegraph puppetserver.log | flamegraph.pl > profile.svg
  puppet-profile-parser --format zipkin puppetserver.log > spans.json
        """
    )
    parser.add_argument('log_files', nargs='*', help='Puppet Server log files, optionally gzipped')
    parser.add_argument('-f', '--format', dest='output_format', default='human',
                        help='Output format to use. One of: human (default), csv, flamegraph, zipkin')
    parser.add_argument('--color', dest='color', action='store_true', default=None,
                        help='Colorize output. Defaults to true if stdout is a terminal.')
    parser.add_argument('--no-color', dest='color', action='store_false',
                        help='Do not colorize output.')
    parser.add_argument('--debug', action='store_true', help='Enable backtraces from errors.')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print progress information to stderr.')
    parser.add_argument('--version', action='version', version=__version__)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.log_files:
        print(parser.format_help(), file=sys.stderr)
        return 1

    # Resolved once here, the formatters never look at the terminal themselves
    use_color = sys.stdout.isatty() if args.color is None else args.color

    try:
        formatter = get_formatter(args.output_format, sys.stdout, use_color)
        log_files = LogFileProcessor.expand_paths(args.log_files)

        log_parser = LogParser(ParserConfig(verbose=args.verbose))
        for log_file in log_files:
            log_parser.parse_file(log_file)

        formatter.write(log_parser.traces)
    except Exception as e:
        print(f"ERROR {type(e).__name__}: {e}", file=sys.stderr)
        if args.debug:
            traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
