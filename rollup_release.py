#!/usr/bin/env python3
"""
Release Rollup

Sums an effort field across the tagged Features of an iteration and
writes the total onto a release work item in Azure DevOps Boards.

Usage:
    python rollup_release.py --organization contoso --project Web \\
        --iteration-path "Web\\Release 3" --release-id 9000 \\
        --target-field Custom.TotalEffort
    python rollup_release.py ... --dry-run   # compute only, no update

Authentication: SYSTEM_ACCESSTOKEN (pipeline) or AZURE_DEVOPS_PAT.
"""

import argparse
import json
import os
import sys

from dotenv import load_dotenv

from rollup.logger import get_logger
from rollup.runner import run_rollup
from rollup.workitem.client import WorkItemClient
from rollup.workitem.config import (
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    DEFAULT_SOURCE_FIELD,
    DEFAULT_TAG,
    build_settings,
    load_rollup_config,
)
from rollup.workitem.credentials import resolve_credential
from rollup.workitem.errors import ConfigurationError, RemoteCallError, RollupError
from rollup.workitem.types import CredentialSources

log = get_logger("CLI")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Roll up Feature effort into a release work item"
    )
    parser.add_argument("--organization", help="Azure DevOps organization [ROLLUP_ORGANIZATION]")
    parser.add_argument("--project", help="Project name [ROLLUP_PROJECT]")
    parser.add_argument("--iteration-path", help="Iteration path to search under [ROLLUP_ITERATION_PATH]")
    parser.add_argument("--release-id", type=int, help="Release work item ID [ROLLUP_RELEASE_ID]")
    parser.add_argument("--target-field", help="Field reference to write on the release [ROLLUP_TARGET_FIELD]")
    parser.add_argument(
        "--source-field",
        help=f"Field reference to sum (default: {DEFAULT_SOURCE_FIELD}) [ROLLUP_SOURCE_FIELD]",
    )
    parser.add_argument("--tag", help=f"Tag Features must carry (default: {DEFAULT_TAG}) [ROLLUP_TAG]")
    parser.add_argument(
        "--api-version",
        help=f"REST api-version (default: {DEFAULT_API_VERSION}) [ROLLUP_API_VERSION]",
    )
    parser.add_argument(
        "--base-url",
        help=f"Service host (default: {DEFAULT_BASE_URL}) [ROLLUP_BASE_URL]",
    )
    parser.add_argument("--config", default=None, help="YAML config file (default: config/rollup.yaml)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute and report the total without updating the release",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    load_dotenv()

    try:
        file_values = load_rollup_config(args.config)
        settings = build_settings(
            cli_values=vars(args),
            environ=os.environ,
            file_values=file_values,
            dry_run=args.dry_run,
        )
        credential = resolve_credential(CredentialSources.from_env(os.environ))
        client = WorkItemClient.from_settings(settings, credential)
        result = run_rollup(settings, client)
    except ConfigurationError as err:
        log.error(str(err), error_type="ConfigurationError")
        print(f"invalid:{err}", file=sys.stderr)
        return 2
    except RemoteCallError as err:
        log.error(str(err), error_type="RemoteCallError", **err.diagnostics())
        print(f"error:{err}", file=sys.stderr)
        if err.request_body is not None:
            print(f"request body: {json.dumps(err.request_body)}", file=sys.stderr)
        if err.response_text:
            print(f"response: {err.response_text}", file=sys.stderr)
        return 1
    except RollupError as err:
        log.error(str(err), error_type=type(err).__name__)
        print(f"error:{err}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
