#!/usr/bin/env python3
"""
Front Office Entry Point

Starts the hotel booking or the bank account console:

    python run.py hotel
    python run.py bank
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from front_office.cli import main


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nShutting down...")
