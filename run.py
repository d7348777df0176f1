#!/usr/bin/env python
"""
Gym log progression CLI runner.

Usage:
    python run.py fetch              # fetch sheet and save local snapshot
    python run.py parse "10kg/12"    # parse a single cell
    python run.py export             # export exercise json
    python run.py analyze            # show progression summary
    python run.py visualize          # generate charts
"""

from liftlog.main import main

if __name__ == "__main__":
    main()
