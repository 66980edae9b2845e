#!/usr/bin/env python3
import sys
import os

# Add the repository root to the Python path to recognize the 'code_agent' package
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from code_agent.main import main

if __name__ == "__main__":
    sys.exit(main())
