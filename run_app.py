import sys
import subprocess
from pathlib import Path

APP_PATH = Path(__file__).resolve().parent / "app.py"


def run():
    # Construct the command to run streamlit via python module
    cmd = [sys.executable, "-m", "streamlit", "run", str(APP_PATH), *sys.argv[1:]]
    print(f"Running command: {' '.join(cmd)}")
    subprocess.run(cmd)

if __name__ == "__main__":
    run()
