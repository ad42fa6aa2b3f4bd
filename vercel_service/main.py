"""Serverless entrypoint: Vercel serves this module's `app`."""

from __future__ import annotations

from advisory_board.http_service import create_app

app = create_app()
