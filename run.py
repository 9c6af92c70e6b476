"""Launch the Web3 Academy sandbox.

Usage: python run.py [--port PORT]
Starts Streamlit on frontend/app.py; Streamlit opens the browser itself.
"""

import sys
from pathlib import Path

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from streamlit.web import cli as stcli


def main():
    port = 8501
    if "--port" in sys.argv:
        try:
            port = int(sys.argv[sys.argv.index("--port") + 1])
        except (IndexError, ValueError):
            print("Usage: python run.py [--port PORT]")
            sys.exit(1)

    app = PROJECT_ROOT / "frontend" / "app.py"
    sys.argv = ["streamlit", "run", str(app), "--server.port", str(port)]
    sys.exit(stcli.main())


if __name__ == "__main__":
    main()
