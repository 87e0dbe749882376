"""
Run with: python -m bestfit
"""
import sys

from bestfit.main import main

if __name__ == "__main__":
    sys.exit(main())
