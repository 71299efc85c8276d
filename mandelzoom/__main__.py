"""
Allow running the package directly: python -m mandelzoom
"""
import logging
from argparse import ArgumentParser

from .app import run


def build_parser():
    parser = ArgumentParser(prog='mandelzoom',
                            description='Real-time Mandelbrot viewer with smooth pan and zoom.')

    parser.add_argument('--width', type=int,
                        dest='width', help='window width in pixels',
                        metavar='WIDTH', default=None)

    parser.add_argument('--height', type=int,
                        dest='height', help='window height in pixels',
                        metavar='HEIGHT', default=None)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='iteration cap for the escape-time test',
                        metavar='MAX_ITERATIONS', default=None)

    parser.add_argument('--settings',
                        dest='settings_path', help='JSON file overriding the default settings',
                        metavar='PATH', default=None)

    parser.add_argument('--verbose', '-v', action='store_true',
                        dest='verbose', help='log debug messages')

    return parser


def main(argv=None):
    options = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.INFO,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )
    run(options.width, options.height, options.max_iterations, options.settings_path)


if __name__ == "__main__":
    main()
