import threading

# PyMuPDF shares one MuPDF context per process and is not thread-safe.
# Every pymupdf document open, read, render or save must hold this lock.
MUPDF_LOCK = threading.RLock()
