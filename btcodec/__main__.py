#!/usr/bin/env python3
"""btcodec - bencode decoder and encoder."""

from __future__ import annotations

from btcodec.cli.main import main

if __name__ == "__main__":
    main()
