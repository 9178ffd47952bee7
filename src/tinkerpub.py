"""tinker-publish - publish and resolve hot-patch baseline artifacts.

    Publishes the apk, mapping.txt and R.txt of every Android build variant to a
    Maven repository and resolves them back for a baseline version.

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from common.logging_utils import configure_logging
from constants import Actions, ExitCodes
from errors import ConfigurationError, RepositoryError, ResolutionError

logger = logging.getLogger(__name__)


def _dispatch(args) -> int:
    # Handlers are imported lazily so --help stays cheap.
    if args.action == Actions.PUBLISH.value:
        from cli_publish import run_publish  # pylint: disable=import-outside-toplevel
        return run_publish(args)
    if args.action == Actions.RESOLVE.value:
        from cli_resolve import run_resolve  # pylint: disable=import-outside-toplevel
        return run_resolve(args)
    if args.action == Actions.COORDINATES.value:
        from cli_inspect import run_coordinates  # pylint: disable=import-outside-toplevel
        return run_coordinates(args)
    if args.action == Actions.VERSIONS.value:
        from cli_inspect import run_versions  # pylint: disable=import-outside-toplevel
        return run_versions(args)
    logger.error("Unknown action: %s", args.action)
    return ExitCodes.CONFIG_ERROR.value


def main(argv=None) -> int:
    """Main entry point; returns the process exit code."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE, args.QUIET)

    try:
        return _dispatch(args)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return ExitCodes.CONFIG_ERROR.value
    except ResolutionError as e:
        logger.error("Resolution failed: %s", e)
        return ExitCodes.RESOLUTION_ERROR.value
    except RepositoryError as e:
        logger.error("Repository error: %s", e)
        return ExitCodes.CONNECTION_ERROR.value
    except OSError as e:
        logger.error("File error: %s", e)
        return ExitCodes.FILE_ERROR.value


if __name__ == "__main__":
    sys.exit(main())
