"""
Name: Fragment Extraction CLI

Responsibilities:
  - Run the pipeline on a local file (no queue, no callback)
  - Print the ProcessResult as JSON on stdout
  - Exit non-zero with a JSON error on stderr for pipeline failures and
    invalid settings

Usage:
  fragment-extract path/to/resume.pdf
  fragment-extract notes.md --fake
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from uuid import uuid4

from pydantic import ValidationError

from .container import get_extraction_orchestrator, reset_container
from .context import clear_context, set_job_context
from .crosscutting.config import get_settings
from .crosscutting.exceptions import ConfigurationError, PipelineError
from .domain.entities import DocumentRef
from .infrastructure.storage import LocalFileStorageAdapter


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fragment-extract",
        description="Extract memory fragments from a local document.",
    )
    parser.add_argument("path", help="Document to analyze (.txt, .md, .docx, .pdf)")
    parser.add_argument(
        "--fake",
        action="store_true",
        help="Use the deterministic fake extractor/recognizer (no API calls)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )
    return parser.parse_args(argv)


def _print_error(exc: PipelineError) -> None:
    print(json.dumps(exc.to_response().to_dict(), ensure_ascii=False), file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    path = Path(args.path).expanduser().resolve()
    if not path.is_file():
        print(json.dumps({"error": f"File not found: {args.path}"}), file=sys.stderr)
        return 2

    if args.fake:
        os.environ["FAKE_LLM"] = "1"
        get_settings.cache_clear()
        reset_container()

    set_job_context(job_id=f"cli-{uuid4().hex[:12]}", document_path=str(path), entrypoint="cli")
    try:
        orchestrator = get_extraction_orchestrator(
            storage=LocalFileStorageAdapter(path.parent)
        )
        result = orchestrator.run(DocumentRef(path=path.name, file_name=path.name))
    except ValidationError as exc:
        # R: invalid env settings (e.g. GOOGLE_API_KEY unset without --fake).
        messages = "; ".join(err["msg"] for err in exc.errors())
        _print_error(ConfigurationError(f"Invalid settings: {messages}"))
        return 1
    except PipelineError as exc:
        _print_error(exc)
        return 1
    finally:
        clear_context()

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=args.indent))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
