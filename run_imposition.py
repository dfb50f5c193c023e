#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Compute a sheet imposition from JSON inputs.
"""

import imposition_calculator.cli


if __name__ == "__main__":
	imposition_calculator.cli.main()
