"""
lab-vision launcher.

Thin wrapper around the package CLI so the tool can be run from a source
checkout without installation:

    python main.py train --dataset mnist --epochs 1 --max-samples 2048
    python main.py infer --dataset mnist --path ./digits
"""

import sys

from lab_vision.core.cli import main

if __name__ == "__main__":
    sys.exit(main())
