"""
SciCalc Scientific Calculator
Main application entry point
"""
import atexit
import os
import subprocess
import sys
import tkinter as tk

import config
from gui import SciCalcGUI

# Global variable to track API process
api_process = None


def start_api_server():
    """Start the Flask API server in a separate process"""
    global api_process
    try:
        script_dir = os.path.dirname(os.path.abspath(__file__))
        api_path = os.path.join(script_dir, 'api.py')

        api_process = subprocess.Popen(
            [sys.executable, api_path],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            creationflags=subprocess.CREATE_NEW_CONSOLE if sys.platform == 'win32' else 0
        )
        print(f"API server started (PID: {api_process.pid})")
        print(f"Evaluate over HTTP: POST http://{config.WEB_HOST}:{config.WEB_PORT}/api/evaluate")
    except OSError as e:
        print(f"Failed to start API server: {e}", file=sys.stderr)


def cleanup_api_server():
    """Terminate the API server when the main application exits"""
    global api_process
    if api_process:
        try:
            api_process.terminate()
            api_process.wait(timeout=5)
            print("API server stopped")
        except (OSError, subprocess.TimeoutExpired) as e:
            print(f"Error stopping API server: {e}", file=sys.stderr)
        api_process = None


def main():
    if "--no-api" not in sys.argv:
        start_api_server()
        atexit.register(cleanup_api_server)

    root = tk.Tk()
    SciCalcGUI(root)
    root.mainloop()

    cleanup_api_server()


if __name__ == "__main__":
    main()
