"""
estols - estimate regression coefficients using ordinary least squares.

    estols -x observations.csv -y response.csv [-o output.csv] [--qr]
    estols -t M N [--seed S]

Coefficients go to stdout (or the -o file), one per line. Everything
else goes to stderr through logging.
"""

import argparse
import logging
import sys
from typing import List, Optional

from ._backends import print_backend_info
from .config import OutputFormat, RunConfig, Strategy
from .exceptions import PyOLSError, UsageError
from .loader import load_matrix, load_response
from .ols import OLS
from .synthetic import random_problem
from .writer import write_coefficients

logger = logging.getLogger(__name__)

DESCRIPTION = """\
Estimate the regression coefficients of an n (rows) by m (columns)
observations matrix, n > m, against an n-row response vector.
Alternatively use -t to run a speed test on random data of size m, n.
"""


def _non_negative_int(value: str) -> int:
    if not value.isdigit():
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value!r}")
    return int(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='estols',
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '-x', '--matrix', metavar='observations.csv',
        help='design matrix, n rows of m comma-separated values'
    )
    parser.add_argument(
        '-y', '--response', metavar='response.csv',
        help='response vector, n rows (only the first column is used)'
    )
    parser.add_argument(
        '-o', '--output', metavar='output.csv',
        help='write coefficients here instead of stdout'
    )
    parser.add_argument(
        '-t', '--speed-test', nargs=2, type=_non_negative_int, metavar=('M', 'N'),
        help='solve a random problem with m columns and n rows'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='random seed for --speed-test'
    )

    strategy = parser.add_mutually_exclusive_group()
    strategy.add_argument(
        '--strategy', choices=[s.value for s in Strategy], default=Strategy.NORMAL.value,
        help='factorization (default: normal equations)'
    )
    strategy.add_argument(
        '--qr', dest='strategy', action='store_const', const=Strategy.QR.value,
        help='shortcut for --strategy qr (slower, numerically stable)'
    )

    parser.add_argument(
        '--backend', choices=['auto', 'cpu', 'gpu'], default='auto',
        help='compute backend (default: auto = cpu)'
    )
    parser.add_argument(
        '--precision', type=_non_negative_int, default=OutputFormat.precision,
        help='significant digits in the output (default: %(default)s)'
    )
    parser.add_argument(
        '--list-backends', action='store_true',
        help='show backend and hardware status, then exit'
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='only log warnings')

    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    """
    Turn parsed arguments into a RunConfig.

    Raises
    ------
    UsageError
        If input files and speed-test mode are mixed, or inputs are missing
    """
    speed_test = tuple(args.speed_test) if args.speed_test else None

    if speed_test is not None:
        if args.matrix or args.response:
            raise UsageError("-t cannot be combined with -x/-y")
    else:
        missing = [flag for flag, value in (('-x', args.matrix), ('-y', args.response))
                   if not value]
        if missing:
            raise UsageError(
                f"the following arguments are required: {', '.join(missing)} "
                f"(or use -t M N)"
            )

    return RunConfig(
        matrix_path=args.matrix,
        response_path=args.response,
        output_path=args.output,
        strategy=Strategy.parse(args.strategy),
        backend=args.backend,
        speed_test=speed_test,
        seed=args.seed,
        output_format=OutputFormat(precision=args.precision),
    )


def run(config: RunConfig):
    """
    Load (or generate), solve, and write. Returns the coefficients.
    """
    if config.is_speed_test:
        m, n = config.speed_test
        logger.info("running speed test with m=%d and n=%d", m, n)
        X, y = random_problem(m, n, seed=config.seed)
    else:
        logger.info("input matrix file is %s", config.matrix_path)
        logger.info("input observations file is %s", config.response_path)
        X = load_matrix(config.matrix_path, name='matrix')
        y = load_response(config.response_path)

    model = OLS(X, y, strategy=config.strategy, backend=config.backend)

    if config.output_path:
        logger.info("output weights file is %s", config.output_path)
    write_coefficients(model.coef, config.output_path, config.output_format)
    return model.coef


def _configure_logging(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(message)s'))
    package_logger = logging.getLogger('pyols')
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_backends:
        print_backend_info()
        return 0

    try:
        config = config_from_args(args)
    except UsageError as err:
        parser.error(str(err))

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    handler = _configure_logging(level)

    try:
        logger.info("\nestols - Ordinary Least Squares Solver\n")
        run(config)
    except (PyOLSError, OSError, RuntimeError) as err:
        sys.stderr.write(f"{parser.prog}: error: {err}\n")
        return 1
    finally:
        package_logger = logging.getLogger('pyols')
        package_logger.removeHandler(handler)
        package_logger.setLevel(logging.NOTSET)

    return 0


if __name__ == '__main__':
    sys.exit(main())
