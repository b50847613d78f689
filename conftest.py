"""Global pytest configuration."""

import os
import tempfile

# Point the document store at a throwaway directory before any imports
os.environ.setdefault("UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "travel-buddy-test-uploads"))
