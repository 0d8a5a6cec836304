# tests/conftest.py
import os

# Qt workers are exercised without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
