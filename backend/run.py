"""Run script with proper environment loading"""
import sys
from pathlib import Path

# Make the backend directory importable when run from a source checkout
BACKEND_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(BACKEND_DIR))

if __name__ == "__main__":
    from decision_table.cli import main

    raise SystemExit(main(["serve", *sys.argv[1:]]))
