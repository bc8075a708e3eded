# file: backend/api/index.py
"""
FastAPI Backend — Vercel Serverless Function.

Serves the same stateless RNG Kernel API as backend/main.py; the only
difference is how the repo root reaches sys.path in the serverless bundle.
"""

from __future__ import annotations

import os
import sys

_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, _ROOT)

from backend.main import app  # noqa: E402

__all__ = ["app"]
