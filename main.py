#!/usr/bin/env python3
"""
Entry point for running LeadMiner from a source checkout.

    python main.py extract https://www.example.cz --contact-pages
"""

from __future__ import annotations

from leadminer.cli import main

if __name__ == "__main__":
    main()
