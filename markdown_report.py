#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Generate PDF reports and slide decks from markdown files.
"""

# local repo modules
import mdreport.cli


if __name__ == "__main__":
	mdreport.cli.main()
