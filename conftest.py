"""Root conftest.py: ensure the local checkout takes priority over an installed trellis_sounds."""
import sys
import os

# Insert the repository root at the beginning of sys.path so that the local
# trellis_sounds/ package is imported instead of any installed copy.
_repo_root = os.path.dirname(os.path.abspath(__file__))
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)
