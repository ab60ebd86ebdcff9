import argparse
import getpass
import logging
import os
import sys

from dotenv import load_dotenv

from .burndown import calculate_burndown, create_sprint, write_burndown
from .config import ConfigError, config_to_options, options_to_team_sync
from .exceptions import SprintSyncError
from .sync import create_sync_worker

load_dotenv()

logger = logging.getLogger(__name__)


def configure_argument_parser():
    """Configure an ArgumentParser that manages command line options."""

    parser = argparse.ArgumentParser(
        description="Synchronize a sprint burndown from JIRA issues."
    )

    parser.add_argument("config", metavar="config.yml", nargs="?", help="Configuration file")
    parser.add_argument("-v", dest="verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "-vv",
        dest="very_verbose",
        action="store_true",
        help="Even more verbose output",
    )
    parser.add_argument(
        "--sprint",
        metavar="ID",
        dest="id",
        help="Sprint id, overriding the one in the configuration file",
    )
    parser.add_argument(
        "--output-directory",
        "-o",
        metavar="burndown",
        help="Write output files to this directory, rather than the current working directory.",
    )

    # Connection options
    parser.add_argument("--domain", metavar="https://my.jira.com", help="JIRA domain name")
    parser.add_argument("--username", metavar="user", help="JIRA user name")
    parser.add_argument("--password", metavar="password", help="JIRA password")
    parser.add_argument("--http-proxy", metavar="https://proxy.local", help="URL to HTTP Proxy")
    parser.add_argument(
        "--https-proxy",
        metavar="https://proxy.local",
        help="URL to HTTPS Proxy",
    )

    return parser


def main():
    parser = configure_argument_parser()
    args = parser.parse_args()
    sys.exit(run_command_line(parser, args))


def run_command_line(parser, args):
    """Run a sprint sync as configured. Returns the process exit status."""
    if not args.config:
        parser.print_usage()
        return 0

    logging.basicConfig(
        format="[%(asctime)s %(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        level=(
            logging.DEBUG
            if args.very_verbose
            else logging.INFO if args.verbose else logging.WARNING
        ),
    )

    logger.debug("Parsing options from %s", args.config)
    try:
        with open(args.config, encoding="utf-8") as config:
            options = config_to_options(
                config.read(), cwd=os.path.dirname(os.path.abspath(args.config))
            )
    except FileNotFoundError:
        logger.error(
            "Configuration file '%s' not found. Please provide a valid config file.",
            args.config,
        )
        return 1
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    # Command line arguments override config file options
    override_options(options["connection"], args)
    override_options(options["sprint"], args)

    sprint_options = options["sprint"]
    if not (sprint_options["id"] and sprint_options["start"] and sprint_options["end"]):
        logger.error("A sprint `Id`, `Start` and `End` are required to sync.")
        return 1

    connection = options["connection"]
    if connection["username"] and not (
        connection["password"] or os.environ.get("JIRA_PASSWORD")
    ):
        connection["password"] = getpass.getpass("Password: ")

    output_dir = args.output_directory or options.get("output_directory")
    if output_dir:
        logger.info("Changing working directory to %s", output_dir)
        os.makedirs(output_dir, exist_ok=True)
        os.chdir(output_dir)

    sprint = create_sprint(
        sprint_options["id"],
        sprint_options["start"],
        sprint_options["end"],
        include_weekends=sprint_options["include_weekends"],
    )

    try:
        worker = create_sync_worker(connection)
        report = worker.sync_sprint(options_to_team_sync(options), sprint)
    except SprintSyncError as e:
        logger.error("%s", e)
        return 1

    logger.info(
        "Synced sprint %s (version %s): %d issues, planned %s, burned %s, "
        "unplanned %s, %d skipped",
        sprint.id,
        report.version,
        len(report.issue_keys),
        sprint.planned,
        sprint.total_burned(),
        sprint.total_unplanned(),
        report.skipped,
    )

    if options["settings"]["burndown_data"]:
        write_burndown(calculate_burndown(sprint), options["settings"]["burndown_data"])
    else:
        logger.debug("No output file specified for burndown data")

    return 0


def override_options(options, arguments):
    """Update `options` dict with settings from `arguments`
    with the same key.
    """
    for key in options.keys():
        if getattr(arguments, key, None) is not None:
            options[key] = getattr(arguments, key)


if __name__ == "__main__":
    main()
