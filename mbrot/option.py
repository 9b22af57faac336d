# -*- coding: utf-8 -*-
"""
Provides the Option class for config file and command line parsing,
and the parsers for the PIXELS and UPPERLEFT/LOWERRIGHT arguments.
"""

__all__ = ['Option', 'parse_pair', 'parse_complex']

import os, re, sys

from configparser import ConfigParser
from optparse import OptionParser
from os.path import basename, exists

from .base import LIMIT

_NEGATIVE = re.compile(r'^-([0-9.]|inf|nan)', re.IGNORECASE)


def parse_pair(s, separator, t):
    """
    Parse a string such as "400x600" or "1.0,0.5" into a pair of values
    of type t. Return None if s is not <left><separator><right>.
    """
    index = s.find(separator)
    if index < 0:
        return None
    try:
        return (t(s[:index]), t(s[index + 1:]))
    except ValueError:
        return None


def parse_complex(s):
    """
    Parse a pair of comma-separated floats into a complex number.
    """
    pair = parse_pair(s, ',', float)
    return None if pair is None else complex(*pair)


class Option(object):

    def __init__(self, argv=None):

        args = list(sys.argv[1:] if argv is None else argv)
        prog = basename(sys.argv[0]) or 'mandel'

        usage = "%prog [--config filepath [section]] [options] FILE PIXELS UPPERLEFT LOWERRIGHT"
        epilog = f"""
          Example: {prog} mandel.png 1000x750 -1.20,0.35 -1,0.20 ;
          PIXELS is WIDTHxHEIGHT, UPPERLEFT and LOWERRIGHT are RE,IM points
          of the complex plane. Option values exceeding the stated range are
          silently clipped to the respective minimum or maximum value.
          """
        epilog = " ".join([line.lstrip() for line in epilog.splitlines()])

        p = OptionParser(prog=prog, usage=usage, version="%prog 0.1.0", epilog=epilog)

        def _opt(parser, opt, t, h):
          if t is None:
            parser.add_option(opt, help=h, action="store_true", default=False)
          else:
            parser.add_option(opt, type=t, help=h, metavar="ARG")

        # allow options with underscore by replacing with dash
        for i in range(len(args)):
            if args[i].startswith('--'):
                name, sep, value = args[i].partition('=')
                args[i] = name.replace('_', '-') + sep + value

        # configure options
        _opt(p, "--limit", "int", "iteration limit [1-65535]: 255")
        _opt(p, "--num-threads", "string", "number of threads to use: auto")
        _opt(p, "--rows-per-band", "int", "rows per band (mandel_queue) [0-height], 0 is one band per thread: 1")
        _opt(p, "--use-fork", "int", "use forked processes (mandel_queue) [0,1]: 0")
        _opt(p, "--quiet", None, "do not report progress")

        p.set_defaults(
            limit=LIMIT, num_threads='auto', rows_per_band=1, use_fork=0 )

        # optionally, override defaults from a config file
        args = self.__handle_config(p, args)

        # process command-line arguments
        (opt, args) = p.parse_args(self.__split_args(p, args))

        if len(args) != 4:
            p.error(f"expected 4 arguments, got {len(args)}")

        self.filename = args[0]

        bounds = parse_pair(args[1], 'x', int)
        if bounds is None or bounds[0] < 1 or bounds[1] < 1:
            p.error(f"error parsing image dimensions: '{args[1]}'")

        self.upper_left = parse_complex(args[2])
        if self.upper_left is None:
            p.error(f"error parsing upper left corner point: '{args[2]}'")

        self.lower_right = parse_complex(args[3])
        if self.lower_right is None:
            p.error(f"error parsing lower right corner point: '{args[3]}'")

        # clamp to minimum-maximum values
        self.width, self.height = bounds
        self.limit = max(1, min(65535, opt.limit))
        self.rows_per_band = max(0, min(self.height, opt.rows_per_band))
        self.use_fork = max(0, min(1, opt.use_fork))
        self.quiet = opt.quiet

        if opt.num_threads != 'auto':
            try:
                self.num_threads = max(1, int(opt.num_threads))
            except ValueError:
                p.error(f"invalid number of threads: '{opt.num_threads}'")
        else:
            self.num_threads = max(1, (os.cpu_count() or 1) - 1)

        del opt, args


    @staticmethod
    def __split_args(parser, args):
        """
        Move negative coordinates such as -1.20,0.35 behind "--" so that
        optparse does not take them for options.
        """
        opts, rest = list(), list()
        takes_value = False

        for i, arg in enumerate(args):
            if takes_value:
                opts.append(arg)
                takes_value = False
            elif arg == '--':
                rest.extend(args[i + 1:])
                break
            elif arg.startswith('--'):
                opts.append(arg)
                option = parser.get_option(arg.split('=', 1)[0])
                takes_value = '=' not in arg and option is not None \
                    and option.takes_value()
            elif _NEGATIVE.match(arg) or not arg.startswith('-'):
                rest.append(arg)
            else:
                opts.append(arg)

        return opts + ['--'] + rest


    @classmethod
    def __handle_config(cls, parser, args):

        if len(args) >= 1 and args[0].startswith('--config'):
            (_, sep, config_path) = args[0].partition('=')
            if sep:
                args = args[1:]
            else:
                if len(args) < 2:
                    parser.error("--config option requires an argument")
                config_path = args[1]
                args = args[2:]

            # a section name precedes the four positional arguments
            split = cls.__split_args(parser, args)
            num_positional = len(split) - split.index('--') - 1

            if len(args) >= 1 and not args[0].startswith('-') and num_positional > 4:
                section = args[0]
                args = args[1:]
            else:
                section = 'common'

            if not exists(config_path):
                parser.error(f"no such file or directory: '{config_path}'")

            config = ConfigParser(default_section=None, empty_lines_in_values=False)
            config.read(config_path)

            cls.__override_defaults(parser, config, 'common')
            if section != 'common':
                cls.__override_defaults(parser, config, section)

        return args


    @classmethod
    def __override_defaults(cls, parser, config, section):

        if not config.has_section(section):
            parser.error(f"no such section in config: '{section}'")

        opt = dict()

        try:
            for key in ('limit', 'rows_per_band', 'use_fork'):
                if config.has_option(section, key):
                    opt[key] = int(config.get(section, key))
        except ValueError as exc:
            parser.error(f"invalid value in config section '{section}': {exc}")

        for key in ('num_threads',):
            if config.has_option(section, key):
                opt[key] = str(config.get(section, key))

        if config.has_option(section, 'quiet'):
            opt['quiet'] = config.getboolean(section, 'quiet')

        if len(opt):
            parser.set_defaults(**opt)
