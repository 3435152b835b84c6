import argparse
import logging
import sys
from masjid_widgets.core.app import LOG_FORMAT, SiteApp


def setup_basic_logging():
    """Setup basic stdout logging before config is loaded"""
    root_logger = logging.getLogger()
    if not root_logger.handlers:  # Only add handler if none exists
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.DEBUG)
        logging.debug("Basic logging initialized")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Masjid website widgets')
    parser.add_argument('--config', default="config.yaml",
                        help='Path to config file (default: ./config.yaml)')
    subparsers = parser.add_subparsers(dest='command', required=True)
    subparsers.add_parser('render', help='Paint every page under site.root into site.output')
    subparsers.add_parser('serve', help='Serve painted pages and the cache API')
    return parser


def main(argv=None) -> int:
    setup_basic_logging()
    args = build_parser().parse_args(argv)

    app = SiteApp(config_path=args.config)
    try:
        if args.command == 'render':
            written = app.render_site()
            logging.info(f"Rendered {len(written)} page(s) into {app.config.output_dir}")
        elif args.command == 'serve':
            from masjid_widgets.api import run_api_server
            run_api_server(app)
    finally:
        app.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
