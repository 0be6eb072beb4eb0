"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or ingests one CSV file of deals from disk.
"""

import argparse

import uvicorn

from fxdeals.bootstrap import bootstrap_create_application, bootstrap_create_batch_ingestion_job
from fxdeals.config import config_load_settings


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when any ingested row failed.
    """

    argument_parser = argparse.ArgumentParser(description="FX deals warehouse runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "ingest-file"),
        help="Runtime command: `api` starts server, `ingest-file` ingests one CSV file of deals",
        type=str,
    )
    argument_parser.add_argument(
        "path",
        nargs="?",
        type=str,
        help="CSV file path for `ingest-file`",
    )
    parsed_arguments = argument_parser.parse_args()
    settings = config_load_settings()

    if parsed_arguments.command == "ingest-file":
        if not parsed_arguments.path:
            argument_parser.error("ingest-file requires a CSV file path")
        batch_ingestion_job = bootstrap_create_batch_ingestion_job(settings=settings)
        with open(parsed_arguments.path, encoding=settings.batch_upload_encoding, newline="") as csv_file:
            batch_report = batch_ingestion_job.job_ingest_csv(csv_file)
        print(batch_report.batch_summary_message())
        for error_message in batch_report.errors:
            print(error_message)
        if batch_report.batch_has_errors():
            raise SystemExit(1)
        return

    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


if __name__ == "__main__":
    main()
