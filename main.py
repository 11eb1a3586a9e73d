"""
main.py
========
Central entry point for the Tounsi Relay.

Run with:
    uvicorn main:app --port 3000
or:
    python main.py
"""

import logging

from dotenv import load_dotenv

load_dotenv()  # Load .env before any settings are read

# Configure logging for the entire application
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Keep OpenAI SDK transport chatter out of the relay log.
for _openai_logger_name in (
    "openai",
    "openai._base_client",
    "httpx",
    "httpcore",
    "httpcore.http11",
    "httpcore.connection",
):
    logging.getLogger(_openai_logger_name).setLevel(logging.CRITICAL)

from tounsi_relay.api.upload import create_app  # noqa: E402
from tounsi_relay.config import Settings  # noqa: E402

settings = Settings.from_env()
app = create_app(settings)

if __name__ == "__main__":
    import uvicorn

    logging.getLogger("tounsi_relay").info(
        "Server listening on %s:%d", settings.host, settings.port
    )
    uvicorn.run("main:app", host=settings.host, port=settings.port)
