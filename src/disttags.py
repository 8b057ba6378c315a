"""disttags command-line entry point.

Reads a published version list and a requested version expression, then
prints the tagged versions (satisfies, latest, pre-release channels) as JSON.
"""

import json
import logging
import os
import sys

from args import parse_args
from cli_config import load_config, resolve_tag_settings
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from versioning.tags import tagged_versions

logger = logging.getLogger(__name__)


def load_versions_file(file_name):
    """Loads published versions from a file.

    The file is either a JSON array of strings or one version per line;
    blank lines and ``#`` comments are skipped.

    Args:
        file_name (str): File path containing the versions, newest first.

    Returns:
        list: Version strings in file order
    """
    try:
        with open(file_name, encoding='utf-8') as file:
            content = file.read()
    except FileNotFoundError as e:
        logging.error("File not found: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except IOError as e:
        logging.error("IO error: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    if content.lstrip().startswith("["):
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logging.error("Invalid JSON version list in %s: %s, aborting", file_name, e)
            sys.exit(ExitCodes.FILE_ERROR.value)
        if not isinstance(data, list):
            logging.error("Version list in %s is not an array, aborting", file_name)
            sys.exit(ExitCodes.FILE_ERROR.value)
        bad = [entry for entry in data if not isinstance(entry, str)]
        if bad:
            logging.error("Version list in %s has non-string entries %r, aborting", file_name, bad)
            sys.exit(ExitCodes.FILE_ERROR.value)
        return data

    versions = []
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith(Constants.VERSION_LIST_COMMENT):
            continue
        versions.append(line)
    return versions


def export_json(tags, path=None):
    """Writes the tagged versions as a JSON array to path, or stdout when path is None.

    Args:
        tags (list): TaggedVersion records.
        path (str): File path to export the JSON.
    """
    data = [tag.to_dict() for tag in tags]
    if not path:
        json.dump(data, sys.stdout, ensure_ascii=False, indent=4)
        sys.stdout.write("\n")
        return
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def _setup_logging(args):
    """Configure logging from --loglevel and --logfile."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    config = load_config(getattr(args, "CONFIG", None))
    allowed, keep_synthetic = resolve_tag_settings(args, config)

    if args.LIST_FROM_FILE:
        versions = load_versions_file(args.LIST_FROM_FILE)
    else:
        versions = list(args.VERSIONS or [])

    if not versions:
        logging.warning("No published versions supplied.")

    if is_debug_enabled(logger):
        logger.debug(
            "CLI inputs",
            extra=extra_context(
                event="function_entry",
                component="cli",
                action="main",
                count=len(versions),
                requested=args.REQUESTED,
                tag_filter=allowed or None,
            ),
        )

    tags = tagged_versions(versions, args.REQUESTED, allowed, keep_synthetic=keep_synthetic)
    export_json(tags, getattr(args, "OUTPUT", None))
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
