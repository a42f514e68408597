#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render QR code cards from URLs or CSV rows to a print-ready PDF.
"""

# local repo modules
import qr_card_maker.cli


if __name__ == "__main__":
	qr_card_maker.cli.main()
