import argparse
import json
import mimetypes
import sys
import time
from pathlib import Path

from app.config.settings import Settings
from app.documents.exceptions import DocumentValidationError
from app.documents.serializer import DocumentSerializer
from app.logging.logger import Log
from app.service.document_service import DocumentService, build_document_service


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="redaction-worker",
        description="Redact Aadhaar, PAN and phone numbers from a PDF or image.",
    )
    parser.add_argument("file", type=Path, help="PDF, JPEG or PNG document")
    parser.add_argument(
        "--content-type",
        help="MIME type of the file (guessed from the extension by default)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=300.0,
        help="seconds to wait for a terminal stage (default: 300)",
    )
    return parser.parse_args(argv)


def wait_for_terminal(
    service: DocumentService,
    document_id: str,
    poll_interval: float,
    timeout: float,
) -> dict[str, object] | None:
    """Poll the record until it is complete or failed; None on timeout or removal."""
    serializer = DocumentSerializer()
    deadline = time.monotonic() + timeout
    last_stage = None
    while time.monotonic() < deadline:
        record = service.get_status(document_id)
        if record is None:
            return None
        if record.stage is not last_stage:
            Log.info(f"[{record.progress:3d}%] {record.stage.value}: {record.status_message}")
            last_stage = record.stage
        if record.stage.is_terminal:
            return serializer.serialize(record)
        time.sleep(poll_interval)
    return None


def main(argv: list[str] | None = None) -> int:
    """Entry point: configure -> build service -> submit -> poll -> print."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    content_type = args.content_type or mimetypes.guess_type(args.file.name)[0] or ""
    service = build_document_service(settings)
    try:
        try:
            record = service.submit(
                args.file.read_bytes(),
                filename=args.file.name,
                content_type=content_type,
            )
        except (DocumentValidationError, OSError) as exc:
            Log.error(f"Rejected {args.file}: {exc}")
            return 2

        result = wait_for_terminal(
            service,
            record.id,
            poll_interval=settings.status_poll_interval_seconds,
            timeout=args.timeout,
        )
        if result is None:
            Log.error(f"Document {record.id} did not finish within {args.timeout}s")
            return 1
        json.dump(result, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0 if result["stage"] == "complete" else 1
    finally:
        service.shutdown()


if __name__ == "__main__":
    sys.exit(main())
