import logging
import os

from offer_ingest.utils.config import DEBUG, LOG_DIR

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_FILE = os.path.join(LOG_DIR, "app.log")

os.makedirs(LOG_DIR, exist_ok=True)

# File output for every module, DEBUG adds per-batch commit lines
logging.basicConfig(
    filename=LOG_FILE,
    filemode="a",
    format=LOG_FORMAT,
    datefmt="%Y-%m-%d %H:%M:%S",
    level=logging.DEBUG if DEBUG else logging.INFO,
)

logger = logging.getLogger("offer-ingest")

# Mirror the ingestion logger on the console
console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
logger.addHandler(console_handler)
