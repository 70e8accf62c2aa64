from app.logging.logger import Log
from app.processor.exceptions import DocumentNotFoundError
from app.processor.processor import Processor


class JobRunner:
    """Run one document's pipeline and keep its failures inside the worker thread.

    The failure is already recorded on the document by the processor; nothing
    is retried.
    """

    def __init__(self, processor: Processor) -> None:
        self._processor = processor

    def run(self, document_id: str) -> bool:
        """Process a document. Returns True when it reached ``complete``."""
        try:
            self._processor.process(document_id)
        except DocumentNotFoundError as exc:
            Log.warning(f"Stopped processing: {exc} (deleted while in flight)")
            return False
        except Exception as exc:
            Log.error(f"Document {document_id} failed: {type(exc).__name__}: {exc}")
            return False
        Log.info(f"Document {document_id} completed successfully")
        return True
