"""Global pytest configuration."""

import os
import tempfile

# Keep tests offline and away from the real state file, before any imports
os.environ["OPENAI_API_KEY"] = ""
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="tripbook-tests-"))
