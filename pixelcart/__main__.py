"""
pixelcart launcher

Usage:
    # Built-in demo cart
    python -m pixelcart

    # A cart definition
    python -m pixelcart carts/demo.yaml --scale 6

    # Headless smoke run (no window)
    python -m pixelcart --headless --frames 300
"""

import argparse
import os
import sys

from pixelcart.cart import Cart, load_cart, run
from pixelcart.config import DEFAULT_SCALE, FPS
from pixelcart.errors import CartLoadError, SpriteSheetError
from pixelcart.input import KeyboardInput, ScriptedInput
from pixelcart.logging import configure_logging, get_logger

log = get_logger('main')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pixelcart',
        description='Run a pixelcart cart',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Controls:
  Arrow keys   move the player
  R            restart
  F            toggle fullscreen
  ESC          quit
        """
    )
    parser.add_argument('cart', nargs='?', help='Cart definition YAML (default: built-in demo)')
    parser.add_argument('--scale', type=int, default=DEFAULT_SCALE,
                        help=f'Window pixels per console pixel (default: {DEFAULT_SCALE})')
    parser.add_argument('--fps', type=int, default=FPS, help=f'Frame rate (default: {FPS})')
    parser.add_argument('--frames', type=int, default=None, help='Stop after N frames')
    parser.add_argument('--headless', action='store_true', help='Run without a window')
    parser.add_argument('--log-level', default=None,
                        help='Log level (TRACE, DEBUG, INFO, WARNING, ERROR, OFF)')
    parser.add_argument('--trace-frames', action='store_true',
                        help='Log every entity every frame (implies --log-level TRACE)')
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.log_level or args.trace_frames:
        # Frame lines log at TRACE, so tracing alone implies that level
        default_level = 'TRACE' if args.trace_frames else 'INFO'
        configure_logging(level=args.log_level or default_level, frames=args.trace_frames)

    if args.headless:
        os.environ['SDL_VIDEODRIVER'] = 'dummy'

    try:
        definition = load_cart(args.cart) if args.cart else None
        buttons = ScriptedInput() if args.headless else KeyboardInput()
        cart = Cart(definition, buttons=buttons)
    except (CartLoadError, SpriteSheetError) as e:
        log.error("%s", e)
        return 1

    run(cart, scale=args.scale, fps=args.fps, max_frames=args.frames)
    return 0


if __name__ == '__main__':
    sys.exit(main())
