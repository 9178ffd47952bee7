"""Argument parsing functionality for tinker-publish."""

import argparse

from constants import Actions


def _add_common(parser):
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to the project file (YAML, YML, or JSON)",
                        action="store",
                        type=str,
                        required=True)
    parser.add_argument("--variant",
                        dest="VARIANTS",
                        help="Only process this variant (can be used multiple times)",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--repository",
                        dest="REPOSITORIES",
                        help="Repository URL or path, replaces configured repositories "
                             "(can be used multiple times)",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--cache-dir",
                        dest="CACHE_DIR",
                        help="Directory receiving artifacts downloaded from repositories",
                        action="store",
                        type=str)
    parser.add_argument("--group-id",
                        dest="GROUP_ID",
                        help="Group id to publish under / resolve from",
                        action="store",
                        type=str)
    parser.add_argument("--artifact-id",
                        dest="ARTIFACT_ID",
                        help="Artifact id to publish under / resolve from (default: application id)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel", "--log-level",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")


def _add_baseline(parser):
    parser.add_argument("--baseline-version",
                        dest="BASELINE_VERSION",
                        help="Published version to patch against",
                        action="store",
                        type=str)
    parser.add_argument("--local-package",
                        dest="LOCAL_PACKAGE",
                        help="Use this local package as baseline instead of the repository",
                        action="store",
                        type=str)
    parser.add_argument("--local-mapping",
                        dest="LOCAL_MAPPING",
                        help="Local baseline mapping file",
                        action="store",
                        type=str)
    parser.add_argument("--local-symbol",
                        dest="LOCAL_SYMBOL",
                        help="Local baseline symbol file",
                        action="store",
                        type=str)
    parser.add_argument("--ignore-mapping",
                        dest="IGNORE_MAPPING",
                        help="Do not resolve the baseline mapping file",
                        action="store_true")


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="tinkerpub",
        description=(
            "tinker-publish - publish and resolve hot-patch baseline artifacts "
            "(apk, mapping.txt, R.txt) in Maven repositories"
        ),
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", required=True)

    publish = subparsers.add_parser(Actions.PUBLISH.value,
                                    help="Publish the artifacts of the current build")
    _add_common(publish)
    publish.add_argument("--version",
                         dest="PUBLISH_VERSION",
                         help="Base version to publish (default: variant version_name)",
                         action="store",
                         type=str)
    publish.add_argument("--dry-run",
                         dest="DRY_RUN",
                         help="Show what would be published without uploading",
                         action="store_true")

    resolve = subparsers.add_parser(Actions.RESOLVE.value,
                                    help="Resolve baseline artifacts for patch generation")
    _add_common(resolve)
    _add_baseline(resolve)
    resolve.add_argument("-o", "--output",
                         dest="OUTPUT",
                         help="Write patch inputs as JSON to this path (default: stdout)",
                         action="store",
                         type=str)

    coordinates = subparsers.add_parser(Actions.COORDINATES.value,
                                        help="Print the dependency notations of every variant")
    _add_common(coordinates)
    _add_baseline(coordinates)
    coordinates.add_argument("--version",
                             dest="PUBLISH_VERSION",
                             help="Base version to publish (default: variant version_name)",
                             action="store",
                             type=str)
    coordinates.add_argument("--baseline",
                             dest="SHOW_BASELINE",
                             help="Show baseline (resolve) locations instead of publish coordinates",
                             action="store_true")

    versions = subparsers.add_parser(Actions.VERSIONS.value,
                                     help="List baseline versions published for a variant")
    _add_common(versions)

    return parser.parse_args(argv)
