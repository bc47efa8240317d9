"""
Entrypoint for the user console.

Responsibilities:
- Configure logging from settings.LOG_LEVEL
- Launch the Streamlit UI (ui/app_streamlit.py)
Notes:
- Equivalent to: streamlit run ui/app_streamlit.py
- Extra command-line arguments are passed through to `streamlit run`.
"""
import logging
import sys
from pathlib import Path

from streamlit.web import cli as stcli

from config.settings import settings
from core.logging import configure_logging

logger = logging.getLogger(__name__)

APP_PATH = Path(__file__).resolve().parent / "ui" / "app_streamlit.py"


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    logger.info("Starting %s against %s", settings.APP_TITLE, settings.USERS_API_URL)
    sys.argv = ["streamlit", "run", str(APP_PATH), *(argv if argv is not None else sys.argv[1:])]
    return stcli.main()


if __name__ == "__main__":
    # Run with: python main.py for local dev.
    sys.exit(main())
