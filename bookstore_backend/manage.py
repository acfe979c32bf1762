#!/usr/bin/env python
"""
Management entrypoint for the bookstore API.

DJANGO_SETTINGS_MODULE must name a concrete module. An empty value or the
bare package "backend.settings" (which defines nothing) is replaced with
backend.settings.dev. Production sets backend.settings.prod explicitly.
"""

from __future__ import annotations

import os
import sys

DEFAULT_SETTINGS = "backend.settings.dev"


def _ensure_settings_module() -> None:
    selected = os.environ.get("DJANGO_SETTINGS_MODULE", "").strip()
    if selected in ("", "backend.settings"):
        os.environ["DJANGO_SETTINGS_MODULE"] = DEFAULT_SETTINGS


def main() -> None:
    _ensure_settings_module()
    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
