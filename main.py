"""
Personal Site Backend

This is the main entry point for the site backend. By default it serves the
HTTP API; it can also create the database tables or re-publish a stored
blog post to the external platforms.
"""

import sys
import argparse
import logging
from typing import List, Optional

import uvicorn

from config import settings
from utils.logger import get_logger, setup_file_logging
from utils.exceptions import SiteBackendError
from utils.helpers import parse_platform_list
from data.database import db
from data.repositories import BlogPostRepo
from services.publisher import PostPublisher

# Set up logging
logger = get_logger(__name__)


def republish(post_id: str, platforms: Optional[List[str]], image_url: Optional[str],
              repo: Optional[BlogPostRepo] = None,
              publisher: Optional[PostPublisher] = None) -> bool:
    """
    Run the fan-out again for a stored blog post.

    Returns:
        bool: True if every selected platform succeeded.
    """
    repo = repo or BlogPostRepo()
    post = repo.find_by_id(post_id)
    if post is None:
        logger.error(f"Blog post {post_id} not found")
        return False

    publisher = publisher or PostPublisher()
    selection = settings.DEFAULT_PLATFORMS if platforms is None else platforms
    result = publisher.publish_everywhere(post, post.tags, image_url, selection)
    return result.ok


def serve(host: str, port: int) -> None:
    """Serve the HTTP API with uvicorn."""
    from api.app import create_app

    logger.info(f"Configuration: {settings.get_config_summary()}")
    uvicorn.run(create_app(), host=host, port=port, log_config=None)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Personal Site Backend')
    parser.add_argument('--host', type=str, default=settings.HOST, help='Interface to bind')
    parser.add_argument('--port', type=int, default=settings.PORT, help='Port to listen on')
    parser.add_argument('--log-file', type=str, default=None, help='Log file path')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='INFO', help='Logging level')
    parser.add_argument('--init-db', action='store_true', help='Create the database tables and exit')
    parser.add_argument('--publish', type=str, metavar='POST_ID', default=None,
                        help='Publish a stored blog post to the external platforms and exit')
    parser.add_argument('--platforms', type=str, default=None,
                        help='Comma-separated list of platforms for --publish '
                             '(substack,medium,twitter,linkedin)')
    parser.add_argument('--image-url', type=str, default=None,
                        help='Main image URL for --publish (required by Substack)')
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the application."""
    args = parse_arguments(argv)

    # Set up logging
    log_level = getattr(logging, args.log_level)
    setup_file_logging(args.log_file, log_level)

    try:
        settings.validate_settings()

        if args.init_db:
            db.ensure_schema()
            exit_code = 0
        elif args.publish:
            platforms = None if args.platforms is None else parse_platform_list(args.platforms)
            success = republish(args.publish, platforms, args.image_url)
            if success:
                logger.info("Publishing completed successfully")
                exit_code = 0
            else:
                logger.warning("Publishing completed with errors")
                exit_code = 1
        else:
            logger.info(f"Starting site backend on {args.host}:{args.port}")
            serve(args.host, args.port)
            exit_code = 0

    except SiteBackendError as e:
        logger.error(f"Site backend error: {e}", exc_info=True)
        exit_code = 2
    except Exception as e:
        logger.error(f"Unhandled exception in site backend: {e}", exc_info=True)
        exit_code = 2
    finally:
        db.close()

    logger.info(f"Site backend finished with exit code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
