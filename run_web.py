"""
SciCalc Web API Launcher
Simple script to start only the web server
"""
import os
import sys

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config

try:
    from api import app
except ImportError as e:
    print(f"Error importing modules: {e}", file=sys.stderr)
    print("\nMake sure you have installed the required dependencies:", file=sys.stderr)
    print("  pip install -e .", file=sys.stderr)
    sys.exit(1)


def main():
    print("Starting SciCalc Web API...")
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)


if __name__ == "__main__":
    main()
