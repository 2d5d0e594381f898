#!/usr/bin/env -S uv run
"""Replace the dev database (config-dev.yml) with a dump of a Heroku app's database."""

from __future__ import annotations

import sys

import pgpull._main


def main(argv=None):
    return pgpull._main.main(argv)


if __name__ == "__main__":
    sys.exit(main())
